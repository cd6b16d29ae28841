# cutview/__main__.py
# Package entrypoint so you can run:
#   python -m cutview --solution result.json
# and it will delegate to the CLI viewer/exporter.

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    main()
