import pytest

from posty5.exceptions import EmptyResultError
from posty5.models import FileInput
from posty5.resources.social_workspace import SocialWorkspaceClient

from tests.helpers.transport import ScriptedHandler, envelope


class TestSocialWorkspaceClient:
    @pytest.mark.asyncio
    async def test_create_with_logo(self, make_http, make_storage):
        api = ScriptedHandler(
            (
                200,
                envelope(
                    {
                        "workspaceId": "ws1",
                        "uploadImageConfig": {
                            "uploadUrl": "https://storage.test/logo?sig=1",
                            "imageUrl": "https://cdn.test/logo.png",
                        },
                    }
                ),
            )
        )
        storage_handler = ScriptedHandler((200, b""))

        async with make_http(api) as http, make_storage(storage_handler) as storage:
            result = await SocialWorkspaceClient(http, storage).create(
                "Brand", "Main brand", image=FileInput(b"\x89PNG", filename="logo.png")
            )

        assert result.id == "ws1"
        assert result.image_url == "https://cdn.test/logo.png"
        # No publish call: the API attaches the logo by itself.
        assert api.calls == ["POST /api/social-publisher-workspace"]
        assert api.json()["hasImage"] is True
        assert api.json()["createdFrom"] == "pythonPackage"
        upload = storage_handler.requests[0]
        assert upload.method == "PUT"
        assert upload.headers["content-type"] == "image/png"

    @pytest.mark.asyncio
    async def test_logo_without_upload_target(self, make_http, make_storage):
        api = ScriptedHandler(
            (200, envelope({"workspaceId": "ws1", "uploadImageConfig": None}))
        )
        storage_handler = ScriptedHandler()

        async with make_http(api) as http, make_storage(storage_handler) as storage:
            with pytest.raises(EmptyResultError) as exc_info:
                await SocialWorkspaceClient(http, storage).create(
                    "Brand", "desc", image=FileInput(b"\x89PNG", filename="logo.png")
                )

        assert "image upload URL" in exc_info.value.message
        assert storage_handler.requests == []

    @pytest.mark.asyncio
    async def test_update_without_logo(self, make_http, make_storage):
        api = ScriptedHandler((200, envelope({"workspaceId": "ws1"})))
        storage_handler = ScriptedHandler()

        async with make_http(api) as http, make_storage(storage_handler) as storage:
            result = await SocialWorkspaceClient(http, storage).update(
                "ws1", "Brand", "Renamed"
            )

        assert result.id == "ws1"
        assert result.image_url is None
        assert api.calls == ["PUT /api/social-publisher-workspace/ws1"]
        assert api.json()["hasImage"] is False
        assert storage_handler.requests == []

    @pytest.mark.asyncio
    async def test_empty_name(self, make_http):
        api = ScriptedHandler()

        async with make_http(api) as http:
            with pytest.raises(ValueError):
                await SocialWorkspaceClient(http).create(" ", "desc")

        assert api.requests == []

    @pytest.mark.asyncio
    async def test_missing_workspace_id(self, make_http):
        api = ScriptedHandler((200, envelope({})))

        async with make_http(api) as http:
            with pytest.raises(EmptyResultError):
                await SocialWorkspaceClient(http).create("Brand", "desc")

    @pytest.mark.asyncio
    async def test_search_get_delete(self, make_http):
        api = ScriptedHandler((200, envelope({"items": []})))

        async with make_http(api) as http:
            client = SocialWorkspaceClient(http)
            await client.search()
            await client.get("ws1")
            await client.delete("ws1")

        assert api.calls == [
            "GET /api/social-publisher-workspace",
            "GET /api/social-publisher-workspace/ws1",
            "DELETE /api/social-publisher-workspace/ws1",
        ]
