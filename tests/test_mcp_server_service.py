"""Tests for toggle, create and delete over the persisted overlay."""

import asyncio
import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from mcp_config.api_routes.mcp_servers_api import MCPServerRouter
from mcp_config.exceptions import ConflictError, NotDeletableError, NotFoundError, ValidationError
from mcp_config.registry.models import CreateServerRequest


def _create(service, **fields):
    return service.create(CreateServerRequest(**fields))


class TestListServers:
    def test_no_overlay_file(self, service, builtin):
        servers = service.list_servers()
        builtins = [s for s in servers if s.builtin]
        assert sorted(s.id for s in builtins) == sorted(builtin)
        assert all(s.enabled for s in builtins)


class TestToggle:
    def test_flips_and_persists(self, service, store):
        assert service.toggle("grep") is False
        assert store.load().enabled["grep"] is False

    def test_twice_restores_state(self, service):
        before = {s.id: s.enabled for s in service.list_servers()}["grep"]
        service.toggle("grep")
        service.toggle("grep")
        after = {s.id: s.enabled for s in service.list_servers()}["grep"]
        assert after == before

    def test_absent_entry_defaults_to_enabled(self, service, store):
        store.save(store.load().model_copy(update={"enabled": {}}))
        assert service.toggle("web-search") is False

    def test_unknown_id_is_recorded(self, service, store):
        assert service.toggle("not-configured") is False
        assert store.load().enabled["not-configured"] is False


class TestCreate:
    def test_http_server_listed_enabled(self, service):
        assert _create(service, id="my-tool", type="http", url="https://x") == "my-tool"
        servers = {s.id: s for s in service.list_servers()}
        assert servers["my-tool"].builtin is False
        assert servers["my-tool"].enabled is True
        assert servers["my-tool"].url == "https://x"

    def test_stdio_server_keeps_args_and_env(self, service, store):
        _create(service, id="local", name="Local", type="stdio", command="local-mcp",
                args=["--port", "0"], env={"TOKEN": "t"})
        record = store.load().custom["local"]
        assert record.command == "local-mcp"
        assert record.args == ["--port", "0"]
        assert record.env == {"TOKEN": "t"}
        assert {s.id: s.name for s in service.list_servers()}["local"] == "Local"

    def test_http_headers_stored(self, service, store):
        _create(service, id="auth", type="http", url="https://x", headers={"Authorization": "Bearer t"})
        assert store.load().custom["auth"].headers == {"Authorization": "Bearer t"}

    def test_conflict_with_builtin(self, service, config_path):
        with pytest.raises(ConflictError, match="already exists"):
            _create(service, id="grep", type="http", url="https://x")
        assert not config_path.exists()

    def test_conflict_with_custom(self, service, store):
        _create(service, id="mine", type="http", url="https://a")
        before = store.load()
        with pytest.raises(ConflictError):
            _create(service, id="mine", type="stdio", command="b")
        assert store.load() == before

    def test_bad_id_format(self, service, config_path):
        with pytest.raises(ValidationError, match="lowercase alphanumeric"):
            _create(service, id="My_Tool", type="http", url="https://x")
        assert not config_path.exists()

    def test_trailing_newline_in_id_rejected(self, service):
        with pytest.raises(ValidationError):
            _create(service, id="tool\n", type="http", url="https://x")

    @pytest.mark.parametrize(
        "fields, message",
        [
            ({"type": "http", "url": "https://x"}, "Missing required fields"),
            ({"id": "x"}, "Missing required fields"),
            ({"id": "x", "type": "sse", "url": "https://x"}, "must be one of"),
            ({"id": "x", "type": "http"}, "HTTP servers require a URL"),
            ({"id": "x", "type": "stdio"}, "Stdio servers require a command"),
        ],
    )
    def test_validation(self, service, config_path, fields, message):
        with pytest.raises(ValidationError, match=message):
            _create(service, **fields)
        assert not config_path.exists()


class TestDelete:
    def test_builtin_cannot_be_deleted(self, service):
        with pytest.raises(NotDeletableError, match="Cannot delete built-in"):
            service.delete("grep")

    def test_unknown_cannot_be_deleted(self, service):
        with pytest.raises(NotDeletableError):
            service.delete("missing")

    def test_removes_custom_and_enabled(self, service, store):
        _create(service, id="my-tool", type="http", url="https://x")
        service.toggle("my-tool")
        assert service.delete("my-tool") == "my-tool"
        overlay = store.load()
        assert "my-tool" not in overlay.custom
        assert "my-tool" not in overlay.enabled
        assert "my-tool" not in [s.id for s in service.list_servers()]

    def test_builtin_toggle_survives_other_deletes(self, service, store):
        service.toggle("grep")
        _create(service, id="tmp", type="stdio", command="tmp")
        service.delete("tmp")
        assert store.load().enabled["grep"] is False


class TestTestServer:
    def test_unknown_server(self, service):
        with pytest.raises(NotFoundError, match="Server not found"):
            asyncio.run(service.test("missing"))

    def test_custom_server_is_probed(self, service):
        _create(service, id="mine", type="http", url="https://x")
        assert asyncio.run(service.test("mine")).success is True


class TestEnabledServers:
    def test_excludes_disabled(self, service):
        _create(service, id="mine", type="stdio", command="mine")
        service.toggle("grep")
        result = service.enabled_servers()
        assert "grep" not in result
        assert result["mine"].command == "mine"


class TestHandEditedFile:
    def test_toggle_keeps_valid_customs_beside_invalid_one(self, service, store, config_path):
        _create(service, id="keep-me", type="http", url="https://keep")
        data = json.loads(config_path.read_text())
        data["custom"]["legacy"] = {"type": "sse", "url": "https://old"}
        config_path.write_text(json.dumps(data))

        service.toggle("grep")

        saved = json.loads(config_path.read_text())
        assert "keep-me" in saved["custom"]
        assert saved["enabled"]["keep-me"] is True
        assert saved["enabled"]["grep"] is False


class TestConcurrentMutations:
    def test_parallel_creates_through_router_all_persist(self, service, store):
        router = MCPServerRouter(service)
        ids = [f"tool-{n}" for n in range(20)]

        async def create_all():
            return await asyncio.gather(*[
                router.dispatch("POST", "/api/mcp-servers", {"id": i, "type": "stdio", "command": i})
                for i in ids
            ])

        responses = asyncio.run(create_all())
        assert all(r.payload["success"] for r in responses)
        assert sorted(store.load().custom) == sorted(ids)

    def test_parallel_toggles_from_threads_all_persist(self, service, store):
        ids = [f"tool-{n}" for n in range(20)]
        for i in ids:
            _create(service, id=i, type="stdio", command=i)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(service.toggle, ids))

        enabled = store.load().enabled
        assert all(enabled[i] is False for i in ids)
