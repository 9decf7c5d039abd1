"""
Unit tests for build_prompt().
"""

from app.services.prompt_builder import build_prompt


class TestBuildPrompt:
    def test_default_language_only(self) -> None:
        assert build_prompt("Halo") == (
            "Anda harus menjawab secara eksklusif dalam Bahasa Indonesia.\n\n---\n\nPERTANYAAN:\nHalo"
        )

    def test_custom_language(self) -> None:
        assert build_prompt("Hello", language="English") == (
            "Anda harus menjawab secara eksklusif dalam English.\n\n---\n\nPERTANYAAN:\nHello"
        )

    def test_blank_language_uses_default(self) -> None:
        assert "dalam Bahasa Indonesia." in build_prompt("Halo", language="   ")

    def test_persona_comes_first(self) -> None:
        prompt = build_prompt("Apa itu pajak?", persona="konsultan pajak")
        lines = prompt.split("\n")
        assert lines[0].startswith("Anda adalah konsultan pajak.")
        assert lines[1] == "Anda harus menjawab secara eksklusif dalam Bahasa Indonesia."
        assert prompt.endswith("\n\n---\n\nPERTANYAAN:\nApa itu pajak?")

    def test_blank_persona_is_ignored(self) -> None:
        assert build_prompt("Halo", persona="  ") == build_prompt("Halo")

    def test_query_is_not_escaped(self) -> None:
        query = "  <b>raw</b>\n---\n  "
        assert build_prompt(query).endswith("PERTANYAAN:\n" + query)
