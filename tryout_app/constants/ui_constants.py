"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "Tryouts"
PLACEHOLDER_QUESTION: str = "Enter the statement (supports Markdown + LaTeX)."
PLACEHOLDER_TITLE: str = "Enter tryout title"
PLACEHOLDER_DESCRIPTION: str = "Enter tryout description"
PLACEHOLDER_CATEGORY: str = "Math, Science, History, etc."
PLACEHOLDER_SEARCH: str = "Search…"

MODE_BUTTON_DASHBOARD: str = "Dashboard"
MODE_BUTTON_NEW: str = "New Tryout"

DASHBOARD_REFRESH_BUTTON: str = "Refresh"
DASHBOARD_EDIT_BUTTON: str = "Edit Tryout"
DASHBOARD_TAKE_BUTTON: str = "Take Tryout"
DASHBOARD_DELETE_BUTTON: str = "Delete Tryout"
DASHBOARD_EMPTY_STATE: str = "No tryouts yet. Create your first tryout to get started."

EDITOR_ADD_BUTTON: str = "Add Question"
EDITOR_SAVE_BUTTON: str = "Save Question"
EDITOR_DELETE_BUTTON: str = "Delete Question"
EDITOR_SAVE_ALL_BUTTON: str = "Save All Questions"
EDITOR_SAVE_TRYOUT_BUTTON: str = "Save Tryout"
EDITOR_NO_SELECTION: str = "Select or add a question to edit it."

QUIZ_START_BUTTON: str = "Start Tryout"
QUIZ_PREV_BUTTON: str = "Previous"
QUIZ_NEXT_BUTTON: str = "Next"
QUIZ_SUBMIT_BUTTON: str = "Submit Tryout"
QUIZ_TRUE_BUTTON: str = "True"
QUIZ_FALSE_BUTTON: str = "False"
QUIZ_NO_DESCRIPTION: str = "No Description"

NO_TRYOUT_SELECTED_MESSAGE: str = "Select a tryout from the list first."
