from io import BytesIO

import pytest
from PIL import Image

from landing_builder.core.enums import ImageFormat
from landing_builder.core.exceptions import ImageConversionError
from landing_builder.services.image_converter import (
    ConversionOptions,
    convert_image,
    fit_within,
    format_file_size,
    is_image_content_type,
    recommended_options,
)


def image_bytes(size=(3000, 1500), mode="RGB", fmt="PNG", color="red"):
    buf = BytesIO()
    Image.new(mode, size, color).save(buf, format=fmt)
    return buf.getvalue()


def test_converts_to_webp_within_max_dimensions():
    data = image_bytes()

    result = convert_image(data, "photo.png", "image/png")

    assert result.format == "webp"
    assert result.content_type == "image/webp"
    assert result.filename == "photo.webp"
    assert (result.width, result.height) == (1920, 960)
    assert result.original_size == len(data)
    assert result.compressed_size == len(result.data)
    assert isinstance(result.compression_ratio, int)
    assert Image.open(BytesIO(result.data)).format == "WEBP"


def test_jpeg_flattens_transparency():
    data = image_bytes(size=(400, 300), mode="RGBA", color=(0, 0, 0, 0))

    result = convert_image(data, "logo.png", "image/png", ConversionOptions(format=ImageFormat.JPEG, quality=0.8))

    decoded = Image.open(BytesIO(result.data))
    assert result.filename == "logo.jpg"
    assert decoded.format == "JPEG"
    assert decoded.mode == "RGB"
    assert all(channel >= 250 for channel in decoded.getpixel((10, 10)))


def test_small_images_are_not_upscaled():
    result = convert_image(image_bytes(size=(200, 100)), "small.png", options=recommended_options("avatar"))
    assert (result.width, result.height) == (200, 100)


def test_gif_passes_through_unchanged():
    data = image_bytes(size=(50, 50), mode="P", fmt="GIF", color=0)

    result = convert_image(data, "anim.gif", "image/gif")

    assert result.data is data
    assert result.format == "gif"
    assert result.compression_ratio == 0
    assert result.compressed_size == result.original_size == len(data)


def test_undecodable_bytes_raise():
    with pytest.raises(ImageConversionError):
        convert_image(b"definitely not an image", "broken.png", "image/png")


def test_exif_orientation_is_applied():
    buf = BytesIO()
    exif = Image.Exif()
    exif[0x0112] = 6  # rotate 90 CW to display
    Image.new("RGB", (400, 200), "blue").save(buf, format="JPEG", exif=exif.tobytes())

    result = convert_image(buf.getvalue(), "phone.jpg", "image/jpeg", ConversionOptions(format=ImageFormat.JPEG))

    out = Image.open(BytesIO(result.data))
    assert (result.width, result.height) == (200, 400)
    assert out.size == (200, 400)
    assert out.getexif().get(0x0112) in (None, 1)


def test_decompression_bomb_is_a_conversion_error(mocker):
    mocker.patch.object(Image, "MAX_IMAGE_PIXELS", 100)

    with pytest.raises(ImageConversionError, match="Failed to load image"):
        convert_image(image_bytes(size=(64, 64)), "huge.png", "image/png")


def test_recommended_options():
    assert recommended_options("product").max_width == 1200
    assert recommended_options("avatar").max_height == 400
    banner = recommended_options("banner")
    assert (banner.max_width, banner.max_height, banner.quality) == (1920, 1080, 0.85)
    assert recommended_options("anything") == ConversionOptions()


def test_format_file_size():
    assert format_file_size(0) == "0 Bytes"
    assert format_file_size(512) == "512 Bytes"
    assert format_file_size(1536) == "1.5 KB"
    assert format_file_size(1048576) == "1 MB"


def test_fit_within_keeps_aspect_ratio():
    assert fit_within(4000, 3000, 1200, 1200) == (1200, 900)
    assert fit_within(1000, 4000, 1920, 1080) == (270, 1080)


def test_is_image_content_type():
    assert is_image_content_type("image/png")
    assert not is_image_content_type("video/mp4")
    assert not is_image_content_type(None)
