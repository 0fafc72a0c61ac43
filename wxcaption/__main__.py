from wxcaption.cli import main

raise SystemExit(main())
