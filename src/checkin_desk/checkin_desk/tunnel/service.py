from __future__ import annotations

import base64
import io
import logging
import re
import subprocess
import threading
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import qrcode

from ..core.constants import DEFAULT_TUNNEL_RETRY_SECONDS

logger = logging.getLogger(__name__)

TUNNEL_URL_RE = re.compile(r"(https?://[a-zA-Z0-9-]+\.(lhr\.life|localhost\.run))")
FORM_PATH = "/form.html"


def parse_tunnel_url(output: str) -> Optional[str]:
    m = TUNNEL_URL_RE.search(output)
    return m.group(1).strip() if m else None


def qr_data_url(text: str) -> str:
    """PNG QR code for `text` as a `data:` URL the front end can drop into <img>."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(text)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


@dataclass(frozen=True)
class TunnelStatus:
    url: str
    qr: str

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "qr": self.qr}


class TunnelService:
    """Expose the local server through an `ssh -R` tunnel to localhost.run.

    The public URL is scraped from the ssh output; guests scan the QR code of
    `<url>/form.html`. The ssh process is restarted after it exits until
    `stop()` is called.
    """

    def __init__(
        self,
        *,
        port: int,
        host: str = "nokey@localhost.run",
        retry_seconds: float = DEFAULT_TUNNEL_RETRY_SECONDS,
        spawn: Optional[Callable[[list[str]], subprocess.Popen]] = None,
    ):
        self._port = int(port)
        self._host = host
        self._retry_seconds = float(retry_seconds)
        self._spawn = spawn or self._default_spawn
        self._url = ""
        self._qr = ""
        self._state_lock = threading.Lock()
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._process: Optional[subprocess.Popen] = None

    def command(self) -> list[str]:
        return ["ssh", "-R", f"80:localhost:{self._port}", self._host, "-o", "StrictHostKeyChecking=no"]

    @staticmethod
    def _default_spawn(cmd: list[str]) -> subprocess.Popen:
        return subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            bufsize=1,
        )

    def status(self) -> TunnelStatus:
        with self._state_lock:
            return TunnelStatus(url=self._url, qr=self._qr)

    def handle_output(self, line: str) -> None:
        url = parse_tunnel_url(line)
        if not url:
            return
        form_url = url + FORM_PATH
        qr = qr_data_url(form_url)
        with self._state_lock:
            self._url = url
            self._qr = qr
        logger.info("Tunnel ready: %s (QR for %s)", url, form_url)

    def consume(self, lines: Iterable[str]) -> None:
        for line in lines:
            logger.debug("ssh: %s", line.rstrip())
            self.handle_output(line)

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="tunnel", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stopped.set()
        process = self._process
        if process and process.poll() is None:
            process.terminate()

    def _run(self) -> None:
        while not self._stopped.is_set():
            try:
                self._process = self._spawn(self.command())
            except OSError:
                logger.exception("Cannot start ssh tunnel")
            else:
                if self._process.stdout is not None:
                    self.consume(self._process.stdout)
                code = self._process.wait()
                logger.info("Tunnel process exited (code %s)", code)

            if self._stopped.wait(self._retry_seconds):
                break
            logger.info("Restarting tunnel")
