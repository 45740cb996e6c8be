"""Local file storage for uploaded product images.

Every path is built from ``IMAGE_ROOT`` so files are removed from the same
directory they were written to.
"""
import logging
import os
import uuid

from flask import current_app

logger = logging.getLogger(__name__)

IMAGE_CONTENT_TYPE_PREFIX = "image/"


class ImageValidationError(ValueError):
    """An uploaded file was rejected; ``field`` names the form field."""

    def __init__(self, message, field="images"):
        super().__init__(message)
        self.message = message
        self.field = field


def image_root():
    return current_app.config["IMAGE_ROOT"]


def path_for(name):
    return os.path.join(image_root(), name)


def file_size(upload):
    """Size in bytes of an uploaded file, leaving its stream position intact."""
    stream = upload.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def validate_image(upload, max_kb=None):
    """Reject files over ``max_kb`` kilobytes or without an image/* type.

    Size is checked before type.

    Raises:
        ImageValidationError
    """
    if max_kb is None:
        max_kb = current_app.config["MAX_IMAGE_SIZE_KB"]

    if file_size(upload) > max_kb * 1024:
        raise ImageValidationError(f"Image size must be max {max_kb} kb")

    mimetype = upload.mimetype or ""
    if not mimetype.startswith(IMAGE_CONTENT_TYPE_PREFIX):
        raise ImageValidationError("File must be image")


def validate_images(uploads, max_kb=None):
    """Validate every upload in order; the first bad file aborts."""
    for upload in uploads:
        validate_image(upload, max_kb)


def clean_file_name(original_name):
    """Basename of an uploaded file name with directory parts removed.

    Non-ASCII characters and the extension are kept; "image" stands in for
    names that reduce to nothing.
    """
    name = (original_name or "").replace("\\", "/").replace("\x00", "")
    name = os.path.basename(name).strip()
    if name in ("", ".", ".."):
        return "image"
    return name


def generate_file_name(original_name):
    """``"{uuid4} {original}"`` so repeated uploads of one file never collide."""
    return f"{uuid.uuid4()} {clean_file_name(original_name)}"


def save(upload, name):
    """Write an uploaded file to IMAGE_ROOT/name."""
    os.makedirs(image_root(), exist_ok=True)
    path = path_for(name)
    upload.stream.seek(0)
    upload.save(path)
    return path


def write_bytes(name, data):
    """Write raw bytes to IMAGE_ROOT/name (used for generated images)."""
    os.makedirs(image_root(), exist_ok=True)
    path = path_for(name)
    with open(path, "wb") as fh:
        fh.write(data)
    return path


def delete(name):
    """Delete IMAGE_ROOT/name. Returns False if the file was already gone."""
    path = path_for(name)
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning("Image file already missing: %s", path)
        return False
    return True


def delete_many(names):
    for name in names:
        delete(name)


class ImageBatch:
    """Save a set of uploads, removing them again if the enclosed block fails.

    Usage::

        with ImageBatch(uploads) as names:
            product_service.create(build(names))

    ``names`` are the generated file names, in upload order.
    """

    def __init__(self, uploads):
        self.uploads = list(uploads)
        self.names = []

    def __enter__(self):
        try:
            for upload in self.uploads:
                name = generate_file_name(upload.filename)
                save(upload, name)
                self.names.append(name)
        except Exception:
            self.discard()
            raise
        return list(self.names)

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            logger.info(
                "Removing %d saved image(s) after failed submission", len(self.names)
            )
            self.discard()
        return False

    def discard(self):
        delete_many(self.names)
        self.names = []
