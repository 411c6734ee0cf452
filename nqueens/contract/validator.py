"""Solution-set contract validation and migration.

Validates exported solution sets against the v1.0 model, re-checks every
placement against the constraints of its mode, and migrates legacy
unversioned exports ({"n": ..., "solutions": [...]}).
"""

from typing import Any

import structlog
from pydantic import ValidationError

from ..errors import ContractValidationError, InvalidArgumentError
from ..models.board import SolveMode
from ..models.solution_set import CONTRACT_VERSION, SolutionSet
from ..solver.constraints import DEFAULT_REGION_SIZE, find_violations, predicate_for_mode

logger = structlog.get_logger(__name__)

CURRENT_VERSION = CONTRACT_VERSION
SUPPORTED_VERSIONS = ["1.0.0", "0.9"]  # 0.9 = legacy unversioned


def validate_solution_set(
    payload: dict[str, Any],
    strict: bool = False,
) -> SolutionSet:
    """Validate and optionally migrate a solution-set export.

    Args:
        payload: The export dictionary to validate
        strict: If True, reject non-1.0.0 versions. If False, attempt migration.

    Returns:
        Validated SolutionSet (always 1.0.0 format)

    Raises:
        ContractValidationError: If the export is malformed, a placement
            breaks its constraints, or a placement is listed twice

    Examples:
        >>> payload = {"n": 4, "solutions": [[1, 3, 0, 2], [2, 0, 3, 1]]}
        >>> validate_solution_set(payload).contract_version
        '1.0.0'
    """
    version = payload.get("contract_version", "0.9")  # Assume legacy if missing

    if version != CURRENT_VERSION:
        if strict:
            raise ContractValidationError(
                f"Contract version '{version}' not supported in strict mode. "
                f"Expected '{CURRENT_VERSION}'. Re-export the solutions."
            )
        if version not in SUPPORTED_VERSIONS:
            raise ContractValidationError(f"Unknown contract version '{version}'")
        logger.warning("contract_migration_needed", from_version=version, to_version=CURRENT_VERSION)
        payload = migrate_legacy_export(payload)

    try:
        solution_set = SolutionSet.model_validate(payload)
    except ValidationError as e:
        raise ContractValidationError(f"Contract validation failed: {e}") from e

    _check_placements(solution_set)
    logger.info(
        "contract_validated",
        version=solution_set.contract_version,
        size=solution_set.size,
        mode=solution_set.mode.value,
        count=solution_set.count,
    )
    return solution_set


def migrate_legacy_export(payload: dict[str, Any]) -> dict[str, Any]:
    """Migrate a legacy unversioned export to the 1.0.0 layout.

    Legacy exports carry the board size as ``n`` and may omit ``mode`` and
    ``count``.
    """
    if "solutions" not in payload:
        raise ContractValidationError("Legacy export missing required field: 'solutions'")

    size = payload.get("size", payload.get("n"))
    if size is None:
        raise ContractValidationError("Legacy export missing board size ('n' or 'size')")

    solutions = [list(s) for s in payload["solutions"]]
    migrated = {
        "contract_version": CURRENT_VERSION,
        "size": size,
        "mode": payload.get("mode", SolveMode.CLASSIC.value),
        "region_size": payload.get("region_size"),
        "count": payload.get("count", len(solutions)),
        "solutions": solutions,
    }
    if "generated_at" in payload:
        migrated["generated_at"] = payload["generated_at"]

    logger.info("contract_migrated", from_version="0.9", to_version=CURRENT_VERSION)
    return migrated


def _check_placements(solution_set: SolutionSet) -> None:
    """Re-check every placement against its mode's constraints."""
    try:
        predicate = predicate_for_mode(
            solution_set.mode,
            solution_set.region_size or DEFAULT_REGION_SIZE,
        )
    except InvalidArgumentError as e:
        raise ContractValidationError(str(e)) from e

    errors = []
    seen = set()
    for index, placement in enumerate(solution_set.solutions):
        key = tuple(placement)
        if key in seen:
            errors.append(f"solution {index}: duplicate placement {placement}")
        seen.add(key)
        for violation in find_violations(placement, solution_set.size, predicate):
            errors.append(f"solution {index}: {violation}")

    if errors:
        logger.warning("contract_constraint_violations", count=len(errors), first=errors[0])
        raise ContractValidationError(
            f"{len(errors)} constraint violation(s): " + "; ".join(errors[:5])
        )

    if [tuple(p) for p in solution_set.solutions] != sorted(seen):
        logger.warning("contract_solutions_unordered", size=solution_set.size)
