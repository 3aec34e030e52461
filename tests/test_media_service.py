import httpx
import pytest

from tutorhub.exceptions import MediaUploadError
from tutorhub.services.media_service import CloudinaryUploader


def uploader_with(handler, **kwargs):
    return CloudinaryUploader(
        cloud_name=kwargs.pop("cloud_name", "demo"),
        upload_preset=kwargs.pop("upload_preset", "unsigned_preset"),
        folder="student_photos",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_upload_returns_secure_url():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["body"] = request.content
        return httpx.Response(200, json={"secure_url": "https://res.cloudinary.com/demo/x.jpg"})

    url = await uploader_with(handler).upload(b"\xff\xd8jpeg", "me.jpg", "image/jpeg")

    assert url == "https://res.cloudinary.com/demo/x.jpg"
    assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/upload"
    assert b"unsigned_preset" in seen["body"]
    assert b"student_photos" in seen["body"]
    assert b'filename="me.jpg"' in seen["body"]


@pytest.mark.asyncio
async def test_http_error_status_raises():
    uploader = uploader_with(lambda request: httpx.Response(400, text="bad preset"))
    with pytest.raises(MediaUploadError, match="status 400"):
        await uploader.upload(b"img")


@pytest.mark.asyncio
async def test_error_payload_raises():
    uploader = uploader_with(
        lambda request: httpx.Response(200, json={"error": {"message": "Invalid image file"}}))
    with pytest.raises(MediaUploadError, match="Invalid image file"):
        await uploader.upload(b"img")


@pytest.mark.asyncio
async def test_network_failure_raises():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(MediaUploadError, match="Upload request failed"):
        await uploader_with(handler).upload(b"img")


@pytest.mark.asyncio
async def test_unconfigured_or_empty_upload_is_rejected():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"secure_url": "x"})

    with pytest.raises(MediaUploadError, match="not configured"):
        await uploader_with(handler, cloud_name="").upload(b"img")
    with pytest.raises(MediaUploadError, match="Empty image"):
        await uploader_with(handler).upload(b"")
    assert calls == []
