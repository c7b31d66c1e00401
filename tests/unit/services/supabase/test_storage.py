# Supabase storage client unit tests
import pytest
from unittest.mock import AsyncMock

from landing_builder.core.exceptions import ConfigurationError, StorageAPIError
from landing_builder.services.supabase.storage import SupabaseStorageClient


@pytest.fixture
def storage():
    return SupabaseStorageClient("https://proj.supabase.co/", "service-role-key", "component-media")


@pytest.mark.asyncio
async def test_upload_upserts_object(mocker, storage):
    mock_client = mocker.patch("httpx.AsyncClient")
    mock_response = mocker.MagicMock()
    mock_response.status_code = 200
    mock_response.content = b'{"Key": "component-media/u/c/heroImage-1.webp"}'
    mock_response.json.return_value = {"Key": "component-media/u/c/heroImage-1.webp"}
    request = AsyncMock(return_value=mock_response)
    mock_client.return_value.__aenter__.return_value.request = request

    path = await storage.upload("u/c/heroImage-1.webp", b"data", "image/webp")

    assert path == "u/c/heroImage-1.webp"
    _, kwargs = request.call_args
    assert kwargs["method"] == "POST"
    assert kwargs["url"] == "https://proj.supabase.co/storage/v1/object/component-media/u/c/heroImage-1.webp"
    assert kwargs["headers"]["x-upsert"] == "true"
    assert kwargs["headers"]["Content-Type"] == "image/webp"
    assert kwargs["headers"]["Authorization"] == "Bearer service-role-key"
    assert kwargs["content"] == b"data"


@pytest.mark.asyncio
async def test_remove_sends_prefixes(mocker, storage):
    mock_make_request = mocker.patch.object(SupabaseStorageClient, "_make_request", return_value=[])

    await storage.remove(["u/c/heroImage-1.webp"])

    mock_make_request.assert_called_once_with(
        "DELETE", "/object/component-media", data={"prefixes": ["u/c/heroImage-1.webp"]}
    )


@pytest.mark.asyncio
async def test_storage_error(mocker, storage):
    mock_client = mocker.patch("httpx.AsyncClient")
    mock_response = mocker.MagicMock()
    mock_response.status_code = 400
    mock_response.text = "Bucket not found"
    mock_client.return_value.__aenter__.return_value.request = AsyncMock(return_value=mock_response)

    with pytest.raises(StorageAPIError) as exc_info:
        await storage.upload("x.png", b"data")

    assert "Bucket not found" in str(exc_info.value)


def test_public_url_and_path_round_trip(storage):
    url = storage.public_url("u/c/heroImage-1.webp")

    assert url == "https://proj.supabase.co/storage/v1/object/public/component-media/u/c/heroImage-1.webp"
    assert storage.path_from_url(url) == "u/c/heroImage-1.webp"
    assert storage.path_from_url("https://cdn.example.com/photo.jpg") is None


def test_unconfigured_storage_is_a_configuration_error(mocker, settings):
    settings.SUPABASE_SERVICE_ROLE_KEY = ""
    mocker.patch("landing_builder.services.supabase.storage.get_settings", return_value=settings)

    with pytest.raises(ConfigurationError, match="service role key"):
        SupabaseStorageClient("https://proj.supabase.co", "", "component-media")
