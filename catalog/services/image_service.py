import io
from PIL import Image as PILImage, ImageDraw


PLACEHOLDER_SIZE = (600, 800)


def _hex_to_rgb(color):
    color = color.lstrip("#")
    if len(color) != 6:
        raise ValueError(f"Invalid hex color: {color!r}")
    return tuple(int(color[i:i + 2], 16) for i in (0, 2, 4))


def create_placeholder(color, text="", size=PLACEHOLDER_SIZE):
    """Render a solid-colour JPEG with an optional caption.

    Used to give demo products real files under IMAGE_ROOT.

    Returns:
        JPEG bytes
    """
    img = PILImage.new("RGB", size, _hex_to_rgb(color))
    if text:
        draw = ImageDraw.Draw(img)
        draw.text((20, size[1] - 40), text, fill=(255, 255, 255))

    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=80)
    return buffer.getvalue()
