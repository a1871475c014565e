"""
HTML view routes for the TaskFlow task board.

The board is a single page. Each route restores the
:class:`~taskflow.client.board.TaskBoard` from the session cookie, applies
one user action, stores the board back and redirects to the page. The
board reaches the JSON API over HTTP, the same way any other client
would, so the page only ever shows what the API returned.

The session holds only the id of the task being edited and the status
messages. A rejected submit is answered with the rendered page itself so
the submitted draft stays in the form.

Routes:
    GET  /                      - Task board (fetches the list on load)
    POST /tasks                 - Submit the form (create, or update in edit mode)
    POST /tasks/<id>/edit       - Enter edit mode for a task
    POST /tasks/cancel          - Leave edit mode
    POST /tasks/<id>/delete     - Delete a task
"""

import logging

from flask import Blueprint, current_app, redirect, render_template, request, session, url_for

from taskflow.client import TaskApiClient, TaskBoard, TaskDraft

logger = logging.getLogger(__name__)

views_bp = Blueprint("views", __name__)

SESSION_KEY = "board"


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def _api_client() -> TaskApiClient:
    """Build an API client from the application configuration."""
    return TaskApiClient(
        current_app.config["API_URL"],
        timeout=current_app.config["API_TIMEOUT"],
    )


def _load_board() -> TaskBoard:
    """Restore the board saved by the previous request."""
    return TaskBoard.from_state(_api_client(), session.get(SESSION_KEY))


def _save_board(board: TaskBoard) -> None:
    session[SESSION_KEY] = board.to_state()


def _back_to_board(board: TaskBoard):
    """Persist *board* and redirect to the page (post/redirect/get)."""
    _save_board(board)
    return redirect(url_for("views.index"))


def _render_board(board: TaskBoard, status_code: int = 200, refill_draft: bool = False):
    """
    Fetch the task list and render the page for *board*.

    A message set by the action that led here outlives the refetch.
    Messages are shown once, so they are cleared before the board is
    stored again.

    Args:
        board: Board to render.
        status_code: HTTP status code for the response.
        refill_draft: Rebuild the draft of the edited task from the
            fetched list instead of showing ``board.new_task`` as is.

    Returns:
        A ``(body, status_code)`` tuple.
    """
    carried_error = board.error
    if board.fetch_tasks():
        board.error = carried_error
        if refill_draft:
            board.resume_edit()

    html = render_template("index.html", board=board)

    board.error = ""
    board.success = ""
    _save_board(board)
    return html, status_code


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@views_bp.route("/")
def index():
    """
    Render the task board.

    In edit mode the form is refilled from the freshly fetched task.

    Returns:
        Rendered index.html template with the task list.
    """
    logger.info("GET / - Rendering task board")

    return _render_board(_load_board(), refill_draft=True)


@views_bp.route("/tasks", methods=["POST"])
def submit_task():
    """
    Handle the add/edit form.

    Form Data:
        title: Task title
        description: Task description

    Returns:
        Redirect to the board on success. Otherwise the board rendered
        with the submitted draft: 400 for an incomplete form, 502 when
        the API call failed.
    """
    logger.info("POST /tasks - Submitting task form")

    board = _load_board()
    board.new_task = TaskDraft(
        title=request.form.get("title", ""),
        description=request.form.get("description", ""),
    )
    if board.submit():
        return _back_to_board(board)

    status_code = 502 if board.new_task.is_complete() else 400
    return _render_board(board, status_code=status_code)


@views_bp.route("/tasks/<int:task_id>/edit", methods=["POST"])
def edit_task(task_id: int):
    """Switch the board to edit mode for a task."""
    logger.info("POST /tasks/%s/edit - Entering edit mode", task_id)

    board = _load_board()
    board.start_edit({"id": task_id})
    return _back_to_board(board)


@views_bp.route("/tasks/cancel", methods=["POST"])
def cancel_edit():
    """Leave edit mode and clear the form."""
    logger.info("POST /tasks/cancel - Leaving edit mode")

    board = _load_board()
    board.cancel_edit()
    return _back_to_board(board)


@views_bp.route("/tasks/<int:task_id>/delete", methods=["POST"])
def delete_task(task_id: int):
    """
    Delete a task.

    Args:
        task_id: The unique identifier of the task.

    Returns:
        Redirect to the board.
    """
    logger.info("POST /tasks/%s/delete - Deleting task", task_id)

    board = _load_board()
    board.delete(task_id)
    return _back_to_board(board)
