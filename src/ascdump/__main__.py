from __future__ import annotations

from ascdump.cli import main

# `python -m ascdump ...`
main()
