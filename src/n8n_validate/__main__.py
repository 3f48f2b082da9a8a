from n8n_validate.cli import main

raise SystemExit(main())
