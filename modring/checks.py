"""
Randomised ring-law checks for modular types.

For each modulus the checker samples values and verifies:
  1. add/sub/mul/neg agree with the integer reference
  2. identities: a + 0 = a, a * 1 = a, a + (-a) = 0
  3. associativity and commutativity of + and *
  4. distributivity of * over +
  5. construction round-trip and idempotence

Boundary moduli (2Q overflows the narrow width) can be added so the
widened addition path is exercised as well.
"""

import random
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from . import reference
from .logging import CheckLogger, create_manifest
from .modular import modular_type
from .widths import DEFAULT_NATIVE_BITS, plan_for_modulus


@dataclass
class CheckConfig:
    """Configuration for a check run."""
    moduli: Tuple[int, ...] = (1, 2, 13, 31, 37, 8380417)  # Skipped if > max(narrow)
    samples: int = 200              # Random samples per law
    seed: int = 42
    bits: Optional[int] = None      # Narrow width; None = DEFAULT_NATIVE_BITS
    include_boundary: bool = True   # Add moduli with 2Q > max(narrow)
    output_dir: Optional[str] = None


@dataclass
class LawResult:
    """Outcome of one law for one modulus."""
    law: str
    modulus: int
    bits: int
    widen_add: bool
    samples: int
    passed: bool
    counterexample: Optional[List[int]] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CheckReport:
    results: List[LawResult] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)   # Moduli too wide for bits
    elapsed_s: float = 0.0

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def failures(self) -> List[LawResult]:
        return [r for r in self.results if not r.passed]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'passed': self.passed,
            'n_laws': len(self.results),
            'n_failures': len(self.failures),
            'skipped': list(self.skipped),
            'elapsed_s': self.elapsed_s,
            'failures': [r.to_dict() for r in self.failures],
        }


def _sample_values(q: int, n: int, rng: random.Random) -> List[int]:
    """Exactly n values: edge values first, then uniform samples in [0, q)."""
    edges = sorted({0, 1 % q, (q - 1), q // 2})[:n]
    return edges + [rng.randrange(q) for _ in range(max(n - len(edges), 0))]


def _laws(R: type) -> List[Tuple[str, int, Callable[..., bool]]]:
    q = R.modulus
    zero, one = R.zero(), R.one()
    return [
        ("add_matches_reference", 2,
         lambda a, b: (R(a) + R(b)).value == reference.add_mod(a, b, q)),
        ("sub_matches_reference", 2,
         lambda a, b: (R(a) - R(b)).value == reference.sub_mod(a, b, q)),
        ("mul_matches_reference", 2,
         lambda a, b: (R(a) * R(b)).value == reference.mul_mod(a, b, q)),
        ("neg_matches_reference", 1,
         lambda a: (-R(a)).value == reference.neg_mod(a, q)),
        ("additive_identity", 1,
         lambda a: R(a) + zero == R(a) and zero + R(a) == R(a)),
        ("multiplicative_identity", 1,
         lambda a: R(a) * one == R(a)),
        ("additive_inverse", 1,
         lambda a: R(a) + (-R(a)) == zero),
        ("add_commutative", 2,
         lambda a, b: R(a) + R(b) == R(b) + R(a)),
        ("mul_commutative", 2,
         lambda a, b: R(a) * R(b) == R(b) * R(a)),
        ("add_associative", 3,
         lambda a, b, c: (R(a) + R(b)) + R(c) == R(a) + (R(b) + R(c))),
        ("mul_associative", 3,
         lambda a, b, c: (R(a) * R(b)) * R(c) == R(a) * (R(b) * R(c))),
        ("distributive", 3,
         lambda a, b, c: R(a) * (R(b) + R(c)) == R(a) * R(b) + R(a) * R(c)),
        ("construction_idempotent", 1,
         lambda a: R(R(a).value) == R(a)),
    ]


def check_ring_laws(R: type, samples: int = 200,
                    rng: Optional[random.Random] = None) -> List[LawResult]:
    """Check every ring law for the modular type R.

    Args:
        R: A Modular subclass, e.g. Modular[13].
        samples: Number of sampled argument tuples per law.
        rng: Random source (default: seeded with 42).

    Returns:
        One LawResult per law, plus a round-trip result over raw
        integers larger than Q.
    """
    rng = rng or random.Random(42)
    q = R.modulus
    plan = R.plan
    results = []

    for name, arity, holds in _laws(R):
        cols = [_sample_values(q, samples, rng) for _ in range(arity)]
        for col in cols[1:]:
            rng.shuffle(col)
        counterexample = None
        for args in zip(*cols):
            if not holds(*args):
                counterexample = list(args)
                break
        results.append(LawResult(
            law=name, modulus=q, bits=plan.bits, widen_add=plan.widen_add,
            samples=len(cols[0]), passed=counterexample is None,
            counterexample=counterexample,
        ))

    # Raw inputs beyond Q reduce like Python ints
    counterexample = None
    for _ in range(samples):
        x = rng.randrange(4 * (plan.max_value + 1))
        if R(x).value != reference.reduce_mod(x, q):
            counterexample = [x]
            break
    results.append(LawResult(
        law="round_trip", modulus=q, bits=plan.bits, widen_add=plan.widen_add,
        samples=samples, passed=counterexample is None,
        counterexample=counterexample,
    ))
    return results


def run_checks(config: Optional[CheckConfig] = None,
               logger: Optional[CheckLogger] = None) -> CheckReport:
    """Run ring-law checks for every configured modulus.

    Moduli that do not fit the narrow width are not checked; they are
    listed in report.skipped.

    If config.output_dir is set and no logger is given, a manifest and
    JSONL logs are written there.
    """
    config = config or CheckConfig()
    bits = config.bits if config.bits is not None else DEFAULT_NATIVE_BITS
    max_value = plan_for_modulus(1, bits).max_value

    report = CheckReport()
    moduli = []
    for q in config.moduli:
        if q > max_value:
            report.skipped.append(q)
        elif q not in moduli:
            moduli.append(q)
    if config.include_boundary:
        moduli += [q for q in reference.boundary_moduli(bits) if q not in moduli]

    own_logger = None
    if logger is None and config.output_dir is not None:
        out = Path(config.output_dir)
        run_id = time.strftime("check_%Y%m%d_%H%M%S")
        create_manifest(run_id, asdict(config)).save(out / "manifest.json")
        logger = own_logger = CheckLogger(out)

    rng = random.Random(config.seed)
    t_start = time.time()
    try:
        if logger is not None and report.skipped:
            logger.log_metrics({'bits': bits, 'skipped_moduli': report.skipped})
        for q in moduli:
            R = modular_type(q, bits)
            t0 = time.time()
            results = check_ring_laws(R, config.samples, rng)
            elapsed = time.time() - t0
            report.results.extend(results)

            if logger is not None:
                for r in results:
                    logger.log_result(r.to_dict())
                logger.log_metrics({
                    'modulus': q,
                    'plan': R.plan.describe(),
                    'n_laws': len(results),
                    'elapsed_s': elapsed,
                })
    finally:
        if own_logger is not None:
            own_logger.close()

    report.elapsed_s = time.time() - t_start
    return report
