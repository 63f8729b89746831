"""PDF stream."""

import pydyf

#: Resource names and base fonts of the standard fonts used for text.
FONTS = {
    'regular': ('F1', 'Helvetica'),
    'bold': ('F2', 'Helvetica-Bold'),
    'italic': ('F3', 'Helvetica-Oblique'),
}


class Stream(pydyf.Stream):
    """PDF stream object with extra features."""
    def __init__(self, resources, images, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._resources = resources
        self._images = images
        self._current_color = self._current_color_stroke = None
        self._current_font = None

    def set_color(self, color, stroke=False):
        """Set RGB color given as 8-bit integer channels."""
        if stroke:
            if color == self._current_color_stroke:
                return
            self._current_color_stroke = color
        else:
            if color == self._current_color:
                return
            self._current_color = color
        self.set_color_rgb(*(channel / 255 for channel in color), stroke)

    def set_font_size(self, font, size):
        if (font, size) == self._current_font:
            return
        self._current_font = (font, size)
        super().set_font_size(font, size)

    def show_line(self, text, x, y, style, font_size, color):
        """Show a line of text with its baseline starting at ``(x, y)``."""
        font, _ = FONTS[style]
        self.set_color(color)
        self.begin_text()
        self.set_font_size(font, font_size)
        self.set_text_matrix(1, 0, 0, 1, x, y)
        # Standard fonts use WinAnsiEncoding
        encoded = text.encode('cp1252', errors='replace')
        self.show_text(f'<{encoded.hex()}>')
        self.end_text()

    def add_image(self, image):
        for image_name, known_image in self._images.items():
            if known_image is image:
                # Reuse image already stored in document
                return image_name
        image_name = f'Im{len(self._images)}'
        self._resources['XObject'][image_name] = None  # Set by generate_pdf
        self._images[image_name] = image
        return image_name

    def draw_image(self, image, x, y, width, height):
        image_name = self.add_image(image)
        self.push_state()
        self.set_matrix(width, 0, 0, height, x, y)
        self.draw_x_object(image_name)
        self.pop_state()

    def draw_rule(self, x1, x2, y, color):
        self.set_color(color, stroke=True)
        self.set_line_width(0.5)
        self.move_to(x1, y)
        self.line_to(x2, y)
        self.stroke()
