"""Static metadata describing the Tryouts application."""

APP_NAME = "Tryouts"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "Tryouts is a desktop client for authoring true/false quizzes and taking them with scoring. "
    "It talks to a REST backend and ships with an in-memory reference backend for local use."
)

HELP_TEXT = (
    "Use the dashboard to browse tryouts. Create a new tryout, fill in the title and category, "
    "then add questions one by one. Each question is a statement that is either true or false and "
    "is worth a number of points. Unsaved questions are marked with an asterisk in the sidebar.\n\n"
    "Question text supports Markdown and LaTeX, e.g. $2^{10} = 1024$."
)
