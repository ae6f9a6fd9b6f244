import base64
import io

from PIL import Image, UnidentifiedImageError

MAX_PREVIEW_BYTES = 300_000
PREVIEW_WIDTH = 800


def _save_jpeg(img: Image.Image, max_bytes: int = MAX_PREVIEW_BYTES) -> bytes:
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")

    for quality in (85, 70, 55):
        buf = io.BytesIO()
        img.save(buf, format="JPEG", quality=quality)
        if buf.tell() <= max_bytes:
            return buf.getvalue()

    shrunk = img
    while True:
        shrunk = shrunk.resize(
            (max(1, int(shrunk.width * 0.75)), max(1, int(shrunk.height * 0.75))),
            Image.LANCZOS,
        )
        buf = io.BytesIO()
        shrunk.save(buf, format="JPEG", quality=55)
        if buf.tell() <= max_bytes or shrunk.width == 1:
            return buf.getvalue()


def make_preview(image_bytes: bytes) -> str:
    """업로드 이미지 → 화면 표시용 JPEG data URI. 이미지가 아니면 ValueError."""
    if not image_bytes:
        raise ValueError("Empty image file")
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError("Uploaded file is not a valid image") from e

    if img.width > PREVIEW_WIDTH:
        ratio = PREVIEW_WIDTH / img.width
        img = img.resize((PREVIEW_WIDTH, max(1, int(img.height * ratio))), Image.LANCZOS)

    data = _save_jpeg(img)
    img.close()
    b64 = base64.standard_b64encode(data).decode("utf-8")
    return f"data:image/jpeg;base64,{b64}"


def check_preview(data_uri: str) -> str:
    """이전 제출에서 만든 preview data URI 재사용. JPEG 이미지가 아니면 ValueError."""
    prefix = "data:image/jpeg;base64,"
    if not data_uri.startswith(prefix):
        raise ValueError("Uploaded file is not a valid image")
    try:
        data = base64.b64decode(data_uri[len(prefix):], validate=True)
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (ValueError, UnidentifiedImageError, OSError) as e:
        raise ValueError("Uploaded file is not a valid image") from e
    return data_uri
