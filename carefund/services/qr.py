# carefund/services/qr.py
import asyncio
import base64
import logging
from io import BytesIO
from urllib.parse import quote

import qrcode
from qrcode.exceptions import DataOverflowError

from carefund.core.errors import Internal
from carefund.services.external import with_timeout

logger = logging.getLogger(__name__)


def upi_link(upi_id: str, payee: str, amount) -> str:
    return f"upi://pay?pa={upi_id}&pn={quote(payee, safe='')}&am={amount}&cu=INR"


def _png_data_url(data: str) -> str:
    qr = qrcode.QRCode(version=1, box_size=10, border=4)
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buf = BytesIO()
    img.save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


class QRRenderer:
    def __init__(self, timeout: float = 15.0):
        self.timeout = timeout

    async def render(self, uri: str) -> str:
        """Render `uri` as a QR code and return it as a PNG data URL."""
        try:
            return await with_timeout(asyncio.to_thread(_png_data_url, uri), self.timeout, "QR rendering")
        except (ValueError, OSError, DataOverflowError) as e:
            logger.error(f"QR rendering failed: {e}")
            raise Internal("Error generating QR code") from e
