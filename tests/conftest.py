from __future__ import annotations

from typing import Any, Dict, List

import pytest

from helpers import window


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    return [
        window("dows-lake", "2025-01-10T10:00:00Z", "Safe", avgIceThicknessCm=31.0),
        window("dows-lake", "2025-01-10T10:05:00Z", "Caution", legacy=True, avgIceThicknessCm=29.0),
        window("fifth-avenue", "2025-01-10T10:05:00Z", "Safe"),
        window("fifth-avenue", "2025-01-10T10:00:00Z", "Unsafe"),
        window("nac", "2025-01-10T09:55:00Z", "Safe"),
    ]
