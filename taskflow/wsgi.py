"""
WSGI entry point for TaskFlow.

The task board reaches the JSON API over HTTP at ``API_URL``, which
defaults to this same process (``http://localhost:<PORT>/api``). While a
page request waits on that call, another worker must be free to answer
it. Run the server with more than one worker or thread, for example
``gunicorn --threads 4 taskflow.wsgi:app``, or point ``API_URL`` at a
separately reachable API. With a single synchronous worker every board
request stalls until ``API_TIMEOUT`` and reports "Failed to fetch tasks".
"""

import os

from taskflow import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
