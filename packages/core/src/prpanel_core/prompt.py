"""System prompt shared by every provider in a run.

The prompt is also one half of a contract with reviewer.py: it tells the
model to answer with NO_COMMENT when it has nothing to say, and the session
driver suppresses any response that contains that token.
"""

from __future__ import annotations

NO_COMMENT = "NO_COMMENT"
DEFAULT_LANGUAGE = "Polish"

LANGUAGE_INSTRUCTIONS = {
    "Polish": "IMPORTANT: Respond in Polish language (Polski). All your comments and feedback must be written in Polish.",
    "English": "IMPORTANT: Respond in English language. All your comments and feedback must be written in English.",
    "German": "IMPORTANT: Respond in German language (Deutsch). All your comments and feedback must be written in German.",
    "French": "IMPORTANT: Respond in French language (Français). All your comments and feedback must be written in French.",
    "Spanish": "IMPORTANT: Respond in Spanish language (Español). All your comments and feedback must be written in Spanish.",
}
SUPPORTED_LANGUAGES = tuple(LANGUAGE_INSTRUCTIONS)

_FILE_TABLE_EXAMPLE = """
Create table that lists the files and their respective comments. For example:

Summary of changes: ...

Feedback on files:
| File Name | Comments |
| --- | --- |
| file1.cs | - comment1 |
| file2.js | - comment2<br>- comment3 |
| file3.py | No comments |
| styles.css | - comment4 |
"""


def language_instruction(language: str | None) -> str:
    """Unknown or missing languages fall back to the default (Polish)."""
    return LANGUAGE_INSTRUCTIONS.get(language or DEFAULT_LANGUAGE, LANGUAGE_INSTRUCTIONS[DEFAULT_LANGUAGE])


def build_system_prompt(
    response_language: str | None = DEFAULT_LANGUAGE,
    check_for_bugs: bool = True,
    check_for_performance: bool = True,
    check_for_best_practices: bool = True,
    additional_prompts: list[str] | None = None,
    number_of_files: int = 1,
) -> str:
    multi_file = number_of_files > 1

    directives = []
    if multi_file:
        directives.append("Generate high-level summary and a technical walkthrough of all pull request changes")
    if check_for_bugs:
        directives.append("If there are any bugs, highlight them.")
    if check_for_performance:
        directives.append("If there are major performance problems, highlight them.")
    if check_for_best_practices:
        directives.append("Provide details on missed use of best-practices.")
    directives.extend(p.strip() for p in additional_prompts or [] if p.strip())
    directives += [
        "Do not highlight minor issues and nitpicks.",
        "Only provide instructions for improvements.",
        "If you have no specific instructions for a certain topic, then do not mention the topic at all.",
        f"If you have no instructions for code then respond with {NO_COMMENT} only, otherwise provide your instructions.",
    ]
    directive_lines = "\n".join(f"- {d}" for d in directives)

    prompt = f"""Your task is to act as a code reviewer of a Pull Request.

{language_instruction(response_language)}

{directive_lines}

You are provided with the code changes (diffs) in a unidiff format.

The response should be in markdown format:
- Use bullet points if you have multiple comments. Utilize emojis to make your comments more engaging.
- Use the code block syntax for larger code snippets but do not wrap the whole response in a code block
- Use inline code syntax for smaller inline code snippets
"""
    if multi_file:
        prompt += _FILE_TABLE_EXAMPLE
    return prompt
