import os

from agent_tools.config import Mode
from agent_tools.tools import TOOLS, get_tool, tool_schemas


def test_registry_names():
    assert set(TOOLS) == {"generate", "edit", "analyze"}
    assert get_tool("resize") is None


def test_schemas_expose_argument_descriptions():
    schemas = {s["name"]: s for s in tool_schemas()}

    edit = schemas["edit"]["parameters"]
    assert set(edit["required"]) == {"image", "prompt"}
    assert edit["properties"]["image"]["description"] == "File path or data URL of image to edit"
    assert schemas["analyze"]["description"].startswith("Analyze an image")


def test_generate_in_test_mode(tmp_path, no_network):
    result = TOOLS["generate"].execute(
        {"prompt": "a red ball", "outputDir": str(tmp_path / "t"), "filename": "ball"},
        mode=Mode.MOCK,
    )
    assert os.path.join(str(tmp_path / "t"), "generations", "ball.png") in result


def test_mode_defaults_to_environment(tmp_path, monkeypatch, no_network):
    monkeypatch.setenv("GEMINI_TEST_MODE", "true")

    result = TOOLS["analyze"].execute({"image": "x.png", "question": "what?"})

    assert result.startswith("[TEST MODE]")


def test_http_failure_becomes_error_string(tmp_path, fake_post, api_key):
    fake_post.respond(500, text="backend exploded")

    result = TOOLS["generate"].execute({"prompt": "x", "outputDir": str(tmp_path)}, mode=Mode.LIVE)

    assert result.startswith("Error:")
    assert "500" in result
    assert "backend exploded" in result


def test_missing_credential_becomes_error_string(no_api_key, fake_post):
    result = TOOLS["analyze"].execute({"image": "x.png", "question": "?"}, mode=Mode.LIVE)
    assert result.startswith("Error: GEMINI_API_KEY is not set")


def test_unreadable_image_becomes_error_string(tmp_path, fake_post, api_key):
    result = TOOLS["edit"].execute(
        {"image": str(tmp_path / "missing.png"), "prompt": "x"}, mode=Mode.LIVE
    )
    assert result.startswith("Error: Cannot read image")
    assert fake_post == []


def test_invalid_arguments_become_error_string():
    result = TOOLS["edit"].execute({"prompt": "no image"}, mode=Mode.MOCK)
    assert result.startswith("Error: Invalid arguments: image")
