"""
Prompt templates

code_review renders a single user message asking a downstream model to review
a piece of code. The code is embedded verbatim and never executed.
"""

from .models import CodeReviewArgs

REVIEW_RUBRIC = """Please cover the following:

1. **Code quality**: readability, structure, naming and maintainability
2. **Performance**: inefficient algorithms, unnecessary work, resource usage
3. **Security**: input handling, injection risks, secrets and unsafe operations
4. **Style**: consistency with the language's conventions and formatting
5. **Improvement suggestions**: concrete changes, with example code where helpful
6. **Best practices**: idioms and patterns that would make the code more robust"""

FOCUS_LABELS = {
    "quality": "code quality",
    "performance": "performance",
    "security": "security",
    "style": "style",
}


def code_review(args: CodeReviewArgs) -> str:
    """Render the code review request as the text of one user message."""
    language = args.language or ""
    subject = f"{language} code" if language else "code"

    lines = [f"Please review the following {subject}."]
    if args.focus != "all":
        lines.append(f"Focus especially on **{FOCUS_LABELS[args.focus]}**.")
    lines += [
        "",
        f"```{language}",
        args.code,
        "```",
        "",
        REVIEW_RUBRIC,
    ]
    return "\n".join(lines)
