from nt_load_order.steps.add_imports import add_imports
from nt_load_order.steps.add_kernel_binaries import (
    add_basic_kernel_binaries,
    add_kernel_binaries,
    add_kernel_binary,
)
from nt_load_order.steps.front_partition import FrontPartitioner
from nt_load_order.steps.load_from_registry import load_from_registry
from nt_load_order.steps.sort_by_hardcoded_groups import sort_by_hardcoded_groups
from nt_load_order.steps.sort_by_hardcoded_service_lists import sort_by_hardcoded_service_lists
from nt_load_order.steps.sort_by_tag_and_group import sort_by_tag_and_group

__all__ = [
    "FrontPartitioner",
    "add_basic_kernel_binaries",
    "add_imports",
    "add_kernel_binaries",
    "add_kernel_binary",
    "load_from_registry",
    "sort_by_hardcoded_groups",
    "sort_by_hardcoded_service_lists",
    "sort_by_tag_and_group",
]
