import pytest

from posty5.client import HttpClient
from posty5.exceptions import EmptyResultError, UploadError
from posty5.models import FileInput
from posty5.resources.html_hosting import HtmlHostingClient
from posty5.upload import StorageUploader, UploadHooks

from tests.helpers.transport import Router, ScriptedHandler, envelope

SIGNED_URL = "https://storage.test/put?sig=abc"


def page_created(page_id="p1", upload_url=SIGNED_URL):
    result = {
        "details": {"_id": page_id, "shorterLink": f"https://posty5.com/{page_id}"},
    }
    if upload_url:
        result["uplaodFileConfig"] = {"uploadUrl": upload_url}
    return envelope(result)


class TestCreateWithFile:
    @pytest.mark.asyncio
    async def test_metadata_transfer_publish(self, client_config, fake_sleep, tmp_html_file):
        router = Router(
            api=ScriptedHandler((200, page_created()), (200, envelope())),
            storage=ScriptedHandler((200, b"")),
        )
        http = HttpClient(client_config, transport=router.for_host("api"), sleep=fake_sleep)
        storage = StorageUploader(transport=router.for_host("storage"))

        async with http, storage:
            page = await HtmlHostingClient(http, storage).create_with_file(
                "Landing", FileInput(tmp_html_file), tag="launch"
            )

        assert router.log == [
            "POST api.test.posty5/api/html-hosting",
            "PUT storage.test/put",
            "PUT api.test.posty5/api/html-hosting/publish/p1",
        ]
        assert page.id == "p1"
        assert page.shorter_link == "https://posty5.com/p1"
        assert page.file_url == "https://storage.test/put"

        api_requests = router.handlers["api"]
        assert api_requests.json(0) == {
            "name": "Landing",
            "fileName": "landing.html",
            "tag": "launch",
            "sourceType": "file",
        }
        upload = router.handlers["storage"].requests[0]
        assert upload.headers["content-type"] == "text/html"
        assert upload.content == b"<h1>Hello</h1>"
        assert "x-api-key" not in upload.headers

    @pytest.mark.asyncio
    async def test_storage_failure_stops_before_publish(self, client_config, fake_sleep):
        router = Router(
            api=ScriptedHandler((200, page_created())),
            storage=ScriptedHandler((500, b"")),
        )
        http = HttpClient(client_config, transport=router.for_host("api"), sleep=fake_sleep)
        storage = StorageUploader(transport=router.for_host("storage"))

        async with http, storage:
            with pytest.raises(UploadError) as exc_info:
                await HtmlHostingClient(http, storage).create_with_file(
                    "Landing", FileInput(b"<p>x</p>", filename="x.html")
                )

        assert exc_info.value.status_code == 500
        assert router.log == [
            "POST api.test.posty5/api/html-hosting",
            "PUT storage.test/put",
        ]

    @pytest.mark.asyncio
    async def test_missing_upload_url(self, make_http, make_storage):
        api = ScriptedHandler((200, page_created(upload_url=None)))
        storage_handler = ScriptedHandler()

        async with make_http(api) as http, make_storage(storage_handler) as storage:
            with pytest.raises(EmptyResultError):
                await HtmlHostingClient(http, storage).create_with_file(
                    "Landing", FileInput(b"<p>x</p>", filename="x.html")
                )

        assert storage_handler.requests == []
        assert len(api.requests) == 1

    @pytest.mark.asyncio
    async def test_file_name_required(self, make_http):
        api = ScriptedHandler()

        async with make_http(api) as http:
            with pytest.raises(ValueError):
                await HtmlHostingClient(http).create_with_file("Landing", FileInput(b"x"))

        assert api.requests == []

    @pytest.mark.asyncio
    async def test_unreadable_file_creates_no_page(self, make_http, tmp_path):
        api = ScriptedHandler((200, page_created()), (200, envelope()))

        async with make_http(api) as http:
            async with HtmlHostingClient(http) as client:
                with pytest.raises(FileNotFoundError):
                    await client.create_with_file(
                        "Landing", FileInput(tmp_path / "missing.html")
                    )

        assert api.requests == []

    @pytest.mark.asyncio
    async def test_upload_hooks(self, make_http, make_storage):
        api = ScriptedHandler((200, page_created()), (200, envelope()))
        storage_handler = ScriptedHandler((200, b""))
        events = []
        hooks = UploadHooks(
            on_start=lambda: events.append("start"),
            on_success=lambda url: events.append(url),
            on_complete=lambda: events.append("complete"),
        )

        async with make_http(api) as http, make_storage(storage_handler) as storage:
            await HtmlHostingClient(http, storage).create_with_file(
                "Landing",
                FileInput(b"<p>x</p>", filename="x.html"),
                upload_hooks=hooks,
            )

        assert events == ["start", "https://storage.test/put", "complete"]


class TestUploaderOwnership:
    @pytest.mark.asyncio
    async def test_closes_own_uploader(self, make_http):
        async with make_http(ScriptedHandler()) as http:
            client = HtmlHostingClient(http)
            await client.close()

        assert client._storage._client.is_closed

    @pytest.mark.asyncio
    async def test_context_manager_closes_own_uploader(self, make_http):
        async with make_http(ScriptedHandler()) as http:
            async with HtmlHostingClient(http) as client:
                pass

        assert client._storage._client.is_closed

    @pytest.mark.asyncio
    async def test_shared_uploader_left_open(self, make_http, make_storage):
        async with make_http(ScriptedHandler()) as http:
            async with make_storage(ScriptedHandler()) as storage:
                await HtmlHostingClient(http, storage).close()

                assert not storage._client.is_closed


class TestUpdateWithNewFile:
    @pytest.mark.asyncio
    async def test_republishes_without_upload_target(self, make_http, make_storage):
        api = ScriptedHandler((200, page_created(upload_url=None)), (200, envelope()))
        storage_handler = ScriptedHandler()

        async with make_http(api) as http, make_storage(storage_handler) as storage:
            page = await HtmlHostingClient(http, storage).update_with_new_file(
                "p1", "Landing v2", FileInput(b"<p>v2</p>", filename="v2.html")
            )

        assert api.calls == ["PUT /api/html-hosting/p1", "PUT /api/html-hosting/publish/p1"]
        assert storage_handler.requests == []
        assert page.id == "p1"
        body = api.json(0)
        assert body["isNewFile"] is True
        assert body["createdFrom"] == "pythonPackage"

    @pytest.mark.asyncio
    async def test_uploads_when_target_present(self, make_http, make_storage):
        api = ScriptedHandler((200, page_created()), (200, envelope()))
        storage_handler = ScriptedHandler((200, b""))

        async with make_http(api) as http, make_storage(storage_handler) as storage:
            await HtmlHostingClient(http, storage).update_with_new_file(
                "p1", "Landing v2", FileInput(b"<p>v2</p>", filename="v2.html")
            )

        assert len(storage_handler.requests) == 1
        assert api.calls[-1] == "PUT /api/html-hosting/publish/p1"


class TestGithubPages:
    @pytest.mark.asyncio
    async def test_create_with_github_file(self, make_http):
        api = ScriptedHandler(
            (
                200,
                envelope(
                    {
                        "details": {
                            "_id": "p2",
                            "shorterLink": "https://posty5.com/p2",
                            "githubInfo": {"fileURL": "https://github.com/a/b/blob/main/index.html"},
                        }
                    }
                ),
            )
        )

        async with make_http(api) as http:
            page = await HtmlHostingClient(http).create_with_github_file(
                "Docs", "https://github.com/a/b/blob/main/index.html"
            )

        assert api.calls == ["POST /api/html-hosting"]
        assert api.json()["githubInfo"] == {
            "fileURL": "https://github.com/a/b/blob/main/index.html"
        }
        assert api.json()["sourceType"] == "github"
        assert page.id == "p2"
        assert page.github_info["fileURL"].endswith("index.html")

    @pytest.mark.asyncio
    async def test_update_with_github_file(self, make_http):
        api = ScriptedHandler((200, envelope({"details": {"_id": "p2"}})))

        async with make_http(api) as http:
            await HtmlHostingClient(http).update_with_github_file(
                "p2", "Docs", "https://github.com/a/b/blob/main/v2.html"
            )

        assert api.calls == ["PUT /api/html-hosting/p2"]


class TestPageQueries:
    @pytest.mark.asyncio
    async def test_paths(self, make_http):
        api = ScriptedHandler((200, envelope([])))

        async with make_http(api) as http:
            client = HtmlHostingClient(http)
            await client.get("p1")
            await client.list({"tag": "launch"})
            await client.lookup()
            await client.lookup_forms("p1")
            await client.clean_cache("p1")
            await client.delete("p1")

        assert api.calls == [
            "GET /api/html-hosting/p1",
            "GET /api/html-hosting",
            "GET /api/html-hosting/lookup",
            "GET /api/html-hosting/lookup-froms/p1",
            "PUT /api/html-hosting/p1/clean-cache",
            "DELETE /api/html-hosting/p1",
        ]
