"""Package entry point for ``python -m live_subtitles``.

WHY: Users run ``python -m live_subtitles original.pdf translated.docx``
for CLI mode, or ``python -m live_subtitles --serve`` for the HTTP server.

HOW: Checks sys.argv for the ``--serve`` flag. If present, starts the
FastAPI server with uvicorn. Otherwise, delegates to the CLI's main().
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from live_subtitles.server.app import run_api
        run_api()
    else:
        from live_subtitles.cli import main
        main()
