from __future__ import annotations

from pystoryfix._redact import summarize_for_log


def test_summarize_for_log_names_objects_and_callables() -> None:
    class Button:
        pass

    def render() -> None:
        return None

    summary = summarize_for_log({"component": Button(), "render": render, "props": {"n": 1}, "tags": ("a",)})

    assert summary["component"] == "<Button>"
    assert summary["render"].startswith("<callable:")
    assert summary["props"] == {"n": 1}
    assert summary["tags"] == ["a"]


def test_summarize_for_log_truncates_long_strings() -> None:
    summary = summarize_for_log({"value": "x" * 600}, max_string=10)

    assert summary["value"].startswith("x" * 10)
    assert "<truncated>" in summary["value"]
