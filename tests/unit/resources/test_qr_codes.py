import pytest

from posty5.resources.qr_code import (
    CallTarget,
    EmailTarget,
    FreeTextTarget,
    GeolocationTarget,
    QRCodeClient,
    SmsTarget,
    UrlTarget,
    WifiTarget,
    build_qr_code_payload,
)

from tests.helpers.transport import ScriptedHandler, envelope


class TestTargetEncoding:
    @pytest.mark.parametrize(
        "target,expected",
        [
            (FreeTextTarget("hello world"), "hello world"),
            (UrlTarget("https://example.com"), "https://example.com"),
            (
                EmailTarget("a@b.co", subject="Hi", body="There"),
                "mailto:a@b.co?subject=Hi&body=There",
            ),
            (
                WifiTarget("HomeNet", authentication_type="WPA", password="secret"),
                "WIFI:T:WPA;S:HomeNet;P:secret;",
            ),
            (CallTarget("+15550100"), "tel:+15550100"),
            (SmsTarget("+15550100", message="ping"), "sms:+15550100?body=ping"),
            (GeolocationTarget(30.04, 31.23), "geo:30.04,31.23"),
        ],
    )
    def test_to_text(self, target, expected):
        assert target.to_text() == expected

    def test_payload_is_tagged(self):
        payload = build_qr_code_payload(
            WifiTarget("HomeNet", password="secret"), "tpl_1", name="Guest wifi"
        )

        assert payload["qrCodeTarget"] == {
            "type": "wifi",
            "wifi": {"name": "HomeNet", "authenticationType": "WPA", "password": "secret"},
        }
        assert payload["options"] == {"text": "WIFI:T:WPA;S:HomeNet;P:secret;"}
        assert payload["templateId"] == "tpl_1"
        assert payload["name"] == "Guest wifi"
        assert payload["createdFrom"] == "pythonPackage"

    def test_unknown_target(self):
        with pytest.raises(TypeError):
            build_qr_code_payload({"url": "https://example.com"}, None)


class TestQRCodeClient:
    @pytest.mark.asyncio
    async def test_create(self, make_http):
        handler = ScriptedHandler((200, envelope({"_id": "qr1"})))

        async with make_http(handler) as http:
            result = await QRCodeClient(http).create(
                UrlTarget("https://example.com"), template_id="tpl_1"
            )

        assert result == {"_id": "qr1"}
        assert handler.calls == ["POST /api/qr-code"]
        body = handler.json()
        assert body["qrCodeTarget"] == {"type": "url", "url": {"url": "https://example.com"}}
        assert "name" not in body

    @pytest.mark.asyncio
    async def test_update_posts_to_item(self, make_http):
        handler = ScriptedHandler((200, envelope({"_id": "qr1"})))

        async with make_http(handler) as http:
            await QRCodeClient(http).update("qr1", CallTarget("+15550100"), name="Support")

        assert handler.calls == ["POST /api/qr-code/qr1"]
        assert handler.json()["options"] == {"text": "tel:+15550100"}

    @pytest.mark.asyncio
    async def test_search_get_delete(self, make_http):
        handler = ScriptedHandler(
            (200, envelope({"items": []})),
            (200, envelope({"_id": "qr1"})),
            (200, {"message": "deleted"}),
        )

        async with make_http(handler) as http:
            client = QRCodeClient(http)
            await client.search({"tag": "menu"})
            await client.get("qr1")
            await client.delete("qr1")

        assert handler.calls == [
            "GET /api/qr-code",
            "GET /api/qr-code/qr1",
            "DELETE /api/qr-code/qr1",
        ]
