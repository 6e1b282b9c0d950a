"""Tests for creating production contexts."""

import sys
from pathlib import Path

import pytest

from nt_load_order.context import AppContext, LoadOrderContext, create_context
from nt_load_order.errors import HiveOpenError, SystemRootError
from nt_load_order.integrations.cpu.fake import FakeCpuInfo


@pytest.mark.skipif(sys.platform == "win32", reason="the running system can be analyzed on Windows")
def test_live_analysis_needs_windows() -> None:
    with pytest.raises(SystemRootError, match="--system-root"):
        create_context(None)


def test_offline_system_root_without_hive(tmp_path: Path) -> None:
    with pytest.raises(HiveOpenError, match="SYSTEM"):
        create_context(tmp_path)


def test_app_context_for_test_hands_out_the_given_context() -> None:
    ctx = LoadOrderContext.for_test()
    app = AppContext.for_test(cpu_info=FakeCpuInfo("GenuineIntel"), load_order_context=ctx)

    assert app.open_context(None) is ctx
    assert app.open_context(Path("/elsewhere")) is ctx
    assert app.cpu_info.vendor() == "GenuineIntel"
