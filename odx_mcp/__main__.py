import sys

from odx_mcp.server import main

sys.exit(main())
