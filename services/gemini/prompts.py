"""Prompt builders for the BearAI workspace assistant."""

EXPLAIN_INSTRUCTION = "Explain this code in detail."
FIX_INSTRUCTION = "Find and fix any bugs or performance issues."
ANALYZE_PROMPT = "Analyze this image and explain its technical content."


def chat_system_prompt() -> str:
    """Return the system instruction for grounded chat."""
    return (
        "You are BearAI, a helpful technical assistant. "
        "Use Google Search to provide accurate, up-to-date information when needed."
    )


def live_system_prompt() -> str:
    """Return the system instruction for live voice sessions."""
    return (
        "You are BearAI, a helpful technical assistant. "
        "You are talking to a developer. Be concise and helpful."
    )


def infer_language(filename: str) -> str:
    """Return the language hint for a file: the text after its last dot."""
    return filename.rsplit(".", 1)[-1]


def edit_code_prompt(code: str, instruction: str, filename: str) -> str:
    """Return the prompt asking the model to rewrite a whole file."""
    return (
        "You are BearAI, an expert code assistant.\n"
        "Edit the provided code based on the user's instruction.\n"
        "Return ONLY the complete updated code.\n"
        "Do not include markdown code blocks or explanations.\n\n"
        f"Filename: {filename}\n"
        f"Language: {infer_language(filename)}\n\n"
        f"Current Code:\n{code}\n\n"
        f"Instruction: {instruction}"
    )
