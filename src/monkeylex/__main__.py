from monkeylex.cli import main

raise SystemExit(main())
