# =======================================================================================
# nfc_checkin/workers/serial_worker.py - Background Serial Worker
# =======================================================================================
import time
import logging
import threading
from typing import Optional
from ..config import config
from ..services.serial_service import SerialService, SerialTagReader
from ..services.terminal import CheckinTerminal

try:
    import serial
except ImportError:
    serial = None

logger = logging.getLogger("nfc_checkin.serial")


class SerialWorker:
    """Background worker reading tag UIDs from a serial NFC reader bridge."""

    def __init__(self, terminal: CheckinTerminal):
        self.serial_service = SerialService(terminal)
        self.running = False
        self._thread: Optional[threading.Thread] = None

    # ------------------------------------------------------------------
    # Start / Stop
    # ------------------------------------------------------------------
    def start(self) -> bool:
        """Start the serial worker in a background thread."""
        if not self._should_start():
            return False

        self.running = True
        self._thread = threading.Thread(target=self._run_loop, name="serial-worker", daemon=True)
        self._thread.start()
        logger.info("Serial worker started on %s", config.SERIAL_PORT)
        return True

    def stop(self):
        """Stop the serial worker and wait for the port to close."""
        self.running = False
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=config.SERIAL_TIMEOUT + 1)
            if thread.is_alive():
                logger.warning("Serial worker did not stop within %ss", config.SERIAL_TIMEOUT + 1)
        self._thread = None

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------
    def _should_start(self) -> bool:
        """Check if serial worker should start."""
        if not config.SERIAL_ENABLED:
            logger.debug("Serial reader disabled; skipping worker.")
            return False

        if serial is None:
            logger.warning("pyserial not installed; skipping serial worker.")
            return False

        if not config.SERIAL_PORT:
            logger.debug("SERIAL_PORT not configured; skipping serial worker.")
            return False

        return True

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def _run_loop(self):
        """Main serial communication loop; reopens the port on failure."""
        while self.running:
            try:
                self._handle_serial_connection()
            except Exception as e:
                logger.error("Serial connection error: %s; retrying in 3s", e)
                time.sleep(3)

    def _handle_serial_connection(self):
        logger.debug("Opening %s @ %s", config.SERIAL_PORT, config.SERIAL_BAUD)

        with serial.Serial(
            config.SERIAL_PORT, config.SERIAL_BAUD, timeout=config.SERIAL_TIMEOUT
        ) as port:
            reader = SerialTagReader(port)
            logger.debug("Port open.")

            while self.running:
                self.serial_service.handle_once(reader)
