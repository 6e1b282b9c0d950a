"""Data sources a load order computation runs against."""

import logging
import os
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from nt_load_order.config import ConfigStore, FilesystemConfigStore, InMemoryConfigStore
from nt_load_order.errors import SystemRootError
from nt_load_order.integrations.cpu.abc import CpuInfo
from nt_load_order.integrations.cpu.fake import FakeCpuInfo
from nt_load_order.integrations.cpu.real import RealCpuInfo
from nt_load_order.integrations.pe.abc import PeReader
from nt_load_order.integrations.pe.fake import FakePeReader
from nt_load_order.integrations.pe.real import RealPeReader
from nt_load_order.integrations.registry.abc import Registry
from nt_load_order.integrations.registry.fake import FakeRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadOrderContext:
    """Registry and PE file access for one analyzed system.

    system_root is the Windows directory of the analyzed system. It is None
    when analyzing the running system and no SystemRoot variable is set; only
    adding imports needs it.
    """

    registry: Registry
    pe_reader: PeReader
    system_root: Path | None

    @staticmethod
    def for_test(
        registry: Registry | None = None,
        pe_reader: PeReader | None = None,
        system_root: Path | None = None,
    ) -> "LoadOrderContext":
        """Create a test context with fakes for every unspecified dependency.

        Args:
            registry: Optional Registry. If None, creates an empty FakeRegistry.
            pe_reader: Optional PeReader. If None, creates an empty FakePeReader.
            system_root: Optional system root. If None, uses Path("/test/Windows").
        """
        return LoadOrderContext(
            registry=registry if registry is not None else FakeRegistry(),
            pe_reader=pe_reader if pe_reader is not None else FakePeReader(),
            system_root=system_root if system_root is not None else Path("/test/Windows"),
        )


def create_context(system_root: Path | None) -> LoadOrderContext:
    """Create a production context.

    Args:
        system_root: Windows directory of an offline system whose SYSTEM hive is
            read from disk. None analyzes the running system through winreg.

    Raises:
        SystemRootError: If the running system is to be analyzed on a non-Windows host
        HiveOpenError: If the offline SYSTEM hive cannot be opened
    """
    if system_root is not None:
        from nt_load_order.integrations.registry.hive import HiveRegistry

        logger.debug("Analyzing offline system at %s", system_root)
        return LoadOrderContext(
            registry=HiveRegistry(system_root),
            pe_reader=RealPeReader(),
            system_root=system_root,
        )

    if sys.platform != "win32":
        raise SystemRootError(
            "The running system can only be analyzed on Windows. "
            "Use --system-root to analyze an offline Windows directory."
        )

    from nt_load_order.integrations.registry.live import LiveRegistry

    live_system_root = os.environ.get("SystemRoot")
    logger.debug("Analyzing running system, SystemRoot=%s", live_system_root)
    return LoadOrderContext(
        registry=LiveRegistry(),
        pe_reader=RealPeReader(),
        system_root=Path(live_system_root) if live_system_root else None,
    )


@dataclass(frozen=True)
class AppContext:
    """Dependencies of the command line front end.

    open_context creates the LoadOrderContext for an optional offline system
    root. Tests replace it to inject fakes.
    """

    config_store: ConfigStore
    cpu_info: CpuInfo
    open_context: Callable[[Path | None], LoadOrderContext]

    @staticmethod
    def for_test(
        config_store: ConfigStore | None = None,
        cpu_info: CpuInfo | None = None,
        load_order_context: LoadOrderContext | None = None,
    ) -> "AppContext":
        """Create a test context that hands out load_order_context for every system root.

        Args:
            config_store: Optional ConfigStore. If None, creates an empty InMemoryConfigStore.
            cpu_info: Optional CpuInfo. If None, creates a FakeCpuInfo without vendor.
            load_order_context: Optional LoadOrderContext. If None, uses LoadOrderContext.for_test().
        """
        context = load_order_context
        if context is None:
            context = LoadOrderContext.for_test()
        return AppContext(
            config_store=config_store if config_store is not None else InMemoryConfigStore(),
            cpu_info=cpu_info if cpu_info is not None else FakeCpuInfo(),
            open_context=lambda system_root: context,
        )


def create_app_context() -> AppContext:
    """Create the production front end context."""
    return AppContext(
        config_store=FilesystemConfigStore(),
        cpu_info=RealCpuInfo(),
        open_context=create_context,
    )
