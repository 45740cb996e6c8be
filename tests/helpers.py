import io

from werkzeug.datastructures import FileStorage

JPEG_BYTES = b"\xff\xd8\xff\xe0 fake jpeg"


def upload(data=JPEG_BYTES, filename="rose.jpg", content_type="image/jpeg"):
    """A file part for ``client.post(..., content_type="multipart/form-data")``."""
    return (io.BytesIO(data), filename, content_type)


def file_storage(data=JPEG_BYTES, filename="rose.jpg", content_type="image/jpeg"):
    return FileStorage(stream=io.BytesIO(data), filename=filename, content_type=content_type)
