from gpsreplay.cli import main

raise SystemExit(main())
