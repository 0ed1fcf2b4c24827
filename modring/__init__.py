"""
modring: modular integer rings Z/QZ with overflow-safe fixed-width
arithmetic, plus vectors and matrices over finite-rank commutative rings.

  Modular[Q]          element type of Z/QZ (stored in a numpy uint scalar)
  plan_for_modulus    narrow/widened width selection, fixed per modulus
  Ring, FinRankCRing  structural capability protocols
  Vector, Matrix      generic linear algebra over any FinRankCRing

Groundwork for module-lattice constructions (RLWE/MLWE), where a
higher-rank ring (polynomial quotient) plugs into the same protocols.
"""

__version__ = "0.1.0"

from .widths import (
    NATIVE_WIDTHS, WIDENED, DEFAULT_NATIVE_BITS,
    WidthPlan, plan_for_modulus,
    InvalidModulusError, ZeroModulusError,
)
from .modular import Modular, modular_type, from_value
from .rings import (
    AdditiveGroup, Ring, FinRankCRing,
    is_ring, is_fin_rank_ring, require_ring,
)
from .matrices import Vector, Matrix
from .checks import (
    CheckConfig, CheckReport, LawResult, check_ring_laws, run_checks,
)
from .logging import CheckLogger, RunManifest

__all__ = [
    "NATIVE_WIDTHS", "WIDENED", "DEFAULT_NATIVE_BITS",
    "WidthPlan", "plan_for_modulus",
    "InvalidModulusError", "ZeroModulusError",
    "Modular", "modular_type", "from_value",
    "AdditiveGroup", "Ring", "FinRankCRing",
    "is_ring", "is_fin_rank_ring", "require_ring",
    "Vector", "Matrix",
    "CheckConfig", "CheckReport", "LawResult", "check_ring_laws", "run_checks",
    "CheckLogger", "RunManifest",
]
