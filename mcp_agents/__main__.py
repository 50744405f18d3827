import sys

from mcp_agents.server import main

sys.exit(main())
