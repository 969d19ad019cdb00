from worldengine.cli import main

raise SystemExit(main())
