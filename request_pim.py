#!/usr/bin/env python3
"""
PIM Request tool.

This main script is minimal, focusing only on the application entry point.

Architecture layers:
- CLI Interface Layer: Argument parsing
- Application Layer: Workflow orchestration
- UI Layer: Interactive role selection
- Data Access Layer: Azure CLI identity and PIM API queries
"""

import sys

from pim_request.libs.main_app import main


if __name__ == "__main__":
    sys.exit(main())
