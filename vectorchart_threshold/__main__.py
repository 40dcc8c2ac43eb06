from vectorchart_threshold.cli import main


raise SystemExit(main())
