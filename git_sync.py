#!/usr/bin/env python3
# SPDX-License-Identifier: GPL-3.0-or-later

import sys

import mirror.cli

sys.exit(mirror.cli.main())
