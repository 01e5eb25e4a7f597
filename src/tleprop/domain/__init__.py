# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Domain layer: TLE parsing, Julian Dates, element records, Satellite facade."""
