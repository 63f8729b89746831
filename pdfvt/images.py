"""Draw, load and embed raster images."""

from PIL import Image, ImageDraw

import pydyf

from .logger import LOGGER

BLUE = (66, 133, 244)
ORANGE = (251, 188, 4)
GREEN = (52, 168, 83)
RED = (234, 67, 53)


class ImageLoadingError(ValueError):
    """An error occured when loading an image.

    The image data is probably corrupted or in an invalid format.

    """

    @classmethod
    def from_exception(cls, exception):
        name = type(exception).__name__
        value = str(exception)
        return cls(f'{name}: {value}' if value else name)


class RasterImage:
    def __init__(self, pillow_image):
        self.pillow_image = pillow_image
        self.width = pillow_image.width
        self.height = pillow_image.height
        self.intrinsic_ratio = (
            self.height / self.width if self.width != 0 else 0)

    def get_x_object(self, compress):
        """Return image as a PDF XObject stream."""
        image = self.pillow_image.convert('RGB')
        extra = pydyf.Dictionary({
            'Type': '/XObject',
            'Subtype': '/Image',
            'Width': image.width,
            'Height': image.height,
            'ColorSpace': '/DeviceRGB',
            'BitsPerComponent': 8,
        })
        return pydyf.Stream([image.tobytes()], extra, compress=compress)


def sample_image(width=400, height=300):
    """Draw the geometric design embedded in sample documents."""
    image = Image.new('RGB', (width, height), 'white')
    draw = ImageDraw.Draw(image)
    for (x, y, radius), color in (
            ((125, 125, 75), BLUE), ((190, 150, 70), ORANGE),
            ((265, 165, 65), GREEN)):
        draw.ellipse((x - radius, y - radius, x + radius, y + radius), fill=color)
    draw.rectangle((280, 40, 359, 119), fill=RED)
    draw.rectangle((100, 200, 299, 259), fill=BLUE)
    return RasterImage(image)


def open_image(filename):
    """Open raster image file, raise :exc:`ImageLoadingError` on failure."""
    try:
        with Image.open(filename) as pillow_image:
            pillow_image.load()
    except (OSError, ValueError) as exception:
        raise ImageLoadingError.from_exception(exception)
    return RasterImage(pillow_image)


def load_image(image):
    """Get a :class:`RasterImage` from a filename or a Pillow image.

    Return :obj:`None` and log an error if the image can't be loaded.

    """
    if isinstance(image, RasterImage):
        return image
    if isinstance(image, Image.Image):
        return RasterImage(image)
    try:
        raster_image = open_image(image)
    except ImageLoadingError as exception:
        LOGGER.error('Failed to load image at %r: %s', str(image), exception)
        return None
    LOGGER.debug('Image %r loaded', str(image))
    return raster_image
