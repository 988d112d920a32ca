# src/todo_cli/__main__.py

from .cli.main import main

raise SystemExit(main())
