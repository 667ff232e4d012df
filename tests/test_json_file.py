"""Tests for the JSON file data source."""

import json
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from chathub.core import LlmModel, N8nModel
from chathub.sources import get_available_sources
from chathub.sources.json_file import (
    JsonFileSource,
    agent_from_dict,
    model_from_dict,
    models_response_from_dict,
    session_from_dict,
)


class TestJsonFileSource:
    def test_is_available_with_data(self, data_file):
        assert JsonFileSource(data_file).is_available() is True

    def test_is_available_without_data(self, tmp_path):
        assert JsonFileSource(tmp_path / "missing.json").is_available() is False

    def test_default_path_from_environment(self, data_file):
        with patch.dict("os.environ", {"CHATHUB_DATA_PATH": str(data_file)}):
            source = JsonFileSource()
            assert source.get_path() == data_file
            assert [s.id for s in source.list_sessions()] == ["session-1", "session-2", "session-3"]

    def test_list_sessions(self, data_file):
        sessions = JsonFileSource(data_file).list_sessions()

        assert len(sessions) == 3
        s = sessions[0]
        assert s.id == "session-1"
        assert s.title == "Fix auth bug"
        assert s.owner_id == "user-123"
        assert s.updated_at == datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
        assert s.model == LlmModel(provider="openai", model="gpt-4")
        assert sessions[1].model == N8nModel(workflow_id="wf-1")
        assert sessions[2].model is None

    def test_get_models_keeps_catalog_order(self, data_file):
        models = JsonFileSource(data_file).get_models()

        assert list(models)[:4] == ["anthropic", "openai", "n8n", "custom-agent"]
        assert [a.name for a in models["openai"].models] == ["GPT-4"]
        assert models["openai"].models[0].metadata == {"icon": "openai"}
        assert models["google"].models == []

    def test_missing_file_yields_empty_results(self, tmp_path):
        source = JsonFileSource(tmp_path / "missing.json")
        assert source.list_sessions() == []
        assert all(bucket.models == [] for bucket in source.get_models().values())

    def test_corrupt_file_yields_empty_results(self, tmp_path, caplog):
        path = tmp_path / "chat.json"
        path.write_text("{not json", encoding="utf-8")

        assert JsonFileSource(path).list_sessions() == []
        assert "Failed to read" in caplog.text

    def test_non_object_document(self, tmp_path):
        path = tmp_path / "chat.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert JsonFileSource(path).list_sessions() == []

    def test_out_of_range_timestamp_skips_only_that_record(self, tmp_path, caplog):
        path = tmp_path / "chat.json"
        path.write_text(json.dumps({
            "sessions": [
                {"id": "ok", "updatedAt": "2024-01-15T10:00:00Z"},
                {"id": "far-future", "updatedAt": 10**25},
            ],
            "models": {
                "openai": {"models": [
                    {"name": "GPT-4", "model": {"provider": "openai", "model": "gpt-4"}},
                    {"name": "Broken", "model": {"provider": "openai", "model": "gpt-5"}, "updatedAt": 10**25},
                ]},
            },
        }), encoding="utf-8")
        source = JsonFileSource(path)

        assert [s.id for s in source.list_sessions()] == ["ok"]
        assert [a.name for a in source.get_models()["openai"].models] == ["GPT-4"]
        assert "out of range" in caplog.text

    def test_skips_bad_records_with_warning(self, data_file, caplog):
        JsonFileSource(data_file).list_sessions()
        assert "session has no id" in caplog.text


class TestGetAvailableSources:
    def test_with_data(self, data_file):
        with patch.dict("os.environ", {"CHATHUB_DATA_PATH": str(data_file)}):
            assert [s.name for s in get_available_sources()] == ["json_file"]

    def test_without_data(self, tmp_path):
        with patch.dict("os.environ", {"CHATHUB_DATA_PATH": str(tmp_path / "missing.json")}):
            assert get_available_sources() == []


class TestRecordConversion:
    def test_model_from_dict(self):
        assert model_from_dict({"provider": "n8n", "workflowId": "wf-1"}) == N8nModel(workflow_id="wf-1")

    @pytest.mark.parametrize("raw", [None, "openai::gpt-4", {}, {"provider": "custom-agent"}])
    def test_model_from_dict_rejects_incomplete(self, raw):
        with pytest.raises(ValueError):
            model_from_dict(raw)

    def test_agent_from_dict_epoch_millis(self):
        agent = agent_from_dict({
            "name": "GPT-4",
            "model": {"provider": "openai", "model": "gpt-4"},
            "updatedAt": 1705320000000,
        })
        assert agent.updated_at == datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

    def test_agent_from_dict_bad_timestamp(self):
        with pytest.raises(ValueError):
            agent_from_dict({
                "name": "GPT-4",
                "model": {"provider": "openai", "model": "gpt-4"},
                "updatedAt": ["not", "a", "date"],
            })

    def test_agent_from_dict_out_of_range_timestamp(self):
        with pytest.raises(ValueError):
            agent_from_dict({
                "name": "GPT-4",
                "model": {"provider": "openai", "model": "gpt-4"},
                "updatedAt": 10**25,
            })

    def test_session_from_dict_minimal(self):
        session = session_from_dict({"id": 42})
        assert session.id == "42"
        assert session.title == ""
        assert session.updated_at is None
        assert session.model is None

    def test_models_response_skips_bad_buckets(self, caplog):
        response = models_response_from_dict({
            "openai": {"models": "nope"},
            "n8n": {"models": [{"name": "Flow", "model": {"provider": "n8n", "workflowId": "wf-9"}}]},
        })
        assert response["openai"].models == []
        assert response["n8n"].models[0].model == N8nModel(workflow_id="wf-9")
        assert "no models list" in caplog.text
