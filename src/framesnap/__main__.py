from framesnap.cli import main

raise SystemExit(main())
