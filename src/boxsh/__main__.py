from boxsh.cli import main

raise SystemExit(main())
