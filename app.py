"""Development entry point: ``python app.py``.

Production should serve ``src.worktime.worktime.main:create_app()`` from a
single process; open sessions live in that process's memory.
"""

import os

from src.worktime.worktime.main import create_app

app = create_app()

if __name__ == "__main__":
    # The reloader would start a second scheduler and a second registry.
    app.run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
        debug=app.config["DEBUG"],
        use_reloader=False,
    )
