"""Control-flow components."""

from .branch import Branch, BranchSpec, branch
from .enumerate import Enumerate, EnumerateSpec, enumerate_collection

__all__ = ["Branch", "BranchSpec", "branch", "Enumerate", "EnumerateSpec", "enumerate_collection"]
