from HeldKarpTSP.cli import main

raise SystemExit(main())
