"""
Prompt construction: wrap the user query with persona and output-language instructions.

Caller input is inserted as-is (no escaping).
"""

from app.core.config import DEFAULT_LANGUAGE

PROMPT_DELIMITER = "\n\n---\n\nPERTANYAAN:\n"


def persona_instruction(persona: str) -> str:
    return f"Anda adalah {persona}. Jawablah pertanyaan berikut sesuai dengan peran tersebut."


def language_instruction(language: str) -> str:
    return f"Anda harus menjawab secara eksklusif dalam {language}."


def build_prompt(query: str, persona: str | None = None, language: str | None = None) -> str:
    """
    Build the text sent to the backend.

    Persona (optional) comes first, then the language instruction (always,
    DEFAULT_LANGUAGE when unset), then the delimiter and the query.
    """
    instructions: list[str] = []
    if persona and persona.strip():
        instructions.append(persona_instruction(persona.strip()))
    instructions.append(language_instruction((language or "").strip() or DEFAULT_LANGUAGE))
    return "\n".join(instructions) + PROMPT_DELIMITER + query
