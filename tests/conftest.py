"""
Shared test fixtures for the lenart test suite.

Nothing here needs a display: the live renderer is driven through an
in-memory surface and background tasks are drained by polling.
"""

import io
import time

import pytest
from PIL import Image

from lenart.config import LenartConfig
from lenart.controllers.session import DrawingSession
from lenart.models.document import Document
from lenart.models.geometry import Color
from lenart.models.image_model import Raster


# ---------------------------------------------------------------------------
# Colours
# ---------------------------------------------------------------------------

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)
GREEN = Color(0, 160, 0)


@pytest.fixture
def red():
    return RED


@pytest.fixture
def blue():
    return BLUE


# ---------------------------------------------------------------------------
# Surfaces
# ---------------------------------------------------------------------------

class MemorySurface:
    """Surface that queues frame requests until `flush()`."""

    def __init__(self, width=120, height=80):
        self.width = width
        self.height = height
        self.requests = []
        self.frames = []

    def get_size(self):
        return self.width, self.height

    def request_frame(self, callback):
        self.requests.append(callback)

    def present(self, image):
        self.frames.append(image)

    def flush(self):
        requests, self.requests = self.requests, []
        for callback in requests:
            callback()
        return len(requests)


@pytest.fixture
def surface():
    return MemorySurface()


@pytest.fixture
def make_surface():
    return MemorySurface


# ---------------------------------------------------------------------------
# Documents and rasters
# ---------------------------------------------------------------------------

@pytest.fixture
def document():
    """Fresh, unsized document."""
    return Document()


@pytest.fixture
def sized_document():
    doc = Document()
    doc.set_size(100, 100)
    return doc


def solid_raster(size, color):
    return Raster.from_image(Image.new("RGBA", size, color))


@pytest.fixture
def green_background():
    """Small solid green background, smaller than any test canvas."""
    return solid_raster((20, 20), GREEN.as_tuple())


@pytest.fixture
def split_background():
    """10x4 raster: left half red, right half blue."""
    image = Image.new("RGBA", (10, 4), RED.as_tuple())
    image.paste(BLUE.as_tuple(), (5, 0, 10, 4))
    return Raster.from_image(image)


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (16, 12), (10, 20, 30)).save(buf, format="PNG")
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

@pytest.fixture
def session():
    s = DrawingSession(LenartConfig())
    yield s
    s.tasks.shutdown(wait=True)


@pytest.fixture
def wait_for_tasks():
    """Poll the session until every submitted task has been applied."""

    def _wait(session, timeout=5.0):
        deadline = time.monotonic() + timeout
        while session.tasks.pending:
            session.poll()
            if time.monotonic() > deadline:
                raise AssertionError("background tasks did not finish in time")
            time.sleep(0.005)

    return _wait
