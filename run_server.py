#!/usr/bin/env python
"""Script to run the Task Manager API server."""
import uvicorn

from task_api.config import HOST, LOG_LEVEL, PORT
from task_api.logging_setup import setup_logging

if __name__ == "__main__":
    setup_logging(LOG_LEVEL)
    uvicorn.run(
        "task_api.main:app",
        host=HOST,
        port=PORT,
        log_config=None,
    )
