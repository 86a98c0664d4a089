from __future__ import annotations

from claimpath.domain.graph import compute_tiers


def test_chain_tiers_follow_prerequisite_depth() -> None:
    result = compute_tiers(["a", "b", "c"], {"b": ["a"], "c": ["b"]})

    assert result.tiers == {"a": 0, "b": 1, "c": 2}
    assert result.cycles == ()
    assert result.max_tier == 2


def test_diamond_uses_deepest_prerequisite() -> None:
    result = compute_tiers(
        ["a", "b", "c", "d", "e"],
        {"b": ["a"], "c": ["b"], "d": ["a", "c"], "e": []},
    )

    assert result.tiers == {"a": 0, "b": 1, "c": 2, "d": 3, "e": 0}


def test_unknown_prerequisites_are_ignored() -> None:
    result = compute_tiers(["a"], {"a": ["ghost"], "ghost": ["a"]})

    assert result.tiers == {"a": 0}
    assert result.cycles == ()


def test_two_claim_cycle_resolves_to_tier_zero() -> None:
    result = compute_tiers(["c0", "c1"], {"c0": ["c1"], "c1": ["c0"]})

    assert result.tiers == {"c0": 0, "c1": 0}
    assert result.cycles == (("c0", "c1", "c0"),)


def test_self_dependency_is_reported_as_cycle() -> None:
    result = compute_tiers(["a"], {"a": ["a"]})

    assert result.tiers == {"a": 0}
    assert result.cycles == (("a", "a"),)


def test_claims_downstream_of_a_cycle_still_get_depth() -> None:
    result = compute_tiers(["a", "b", "c", "d"], {"a": ["b"], "b": ["a"], "c": ["a"], "d": ["c"]})

    assert result.cycles == (("a", "b", "a"),)
    assert result.tiers == {"a": 0, "b": 0, "c": 1, "d": 2}


def test_cycle_reported_from_first_repeated_claim() -> None:
    # a -> b -> c -> b: only b and c form the cycle, a sits on the path into it
    result = compute_tiers(["a", "b", "c"], {"a": ["b"], "b": ["c"], "c": ["b"]})

    assert result.cycles == (("b", "c", "b"),)
    assert result.tiers["b"] == 0
    assert result.tiers["c"] == 0
    assert result.tiers["a"] == 1


def test_long_chain_does_not_hit_recursion_limit() -> None:
    size = 5000
    claim_ids = [f"c{index:05d}" for index in range(size)]
    # lexically first claim is the deepest one, so the walk descends the whole chain at once
    prerequisites = {claim_ids[index]: [claim_ids[index + 1]] for index in range(size - 1)}

    result = compute_tiers(claim_ids, prerequisites)

    assert result.tier_of(claim_ids[0]) == size - 1
    assert result.tier_of(claim_ids[-1]) == 0
    assert result.cycles == ()


def test_tier_of_unknown_claim_defaults_to_zero() -> None:
    result = compute_tiers([], {})

    assert result.tier_of("missing") == 0
    assert result.max_tier == 0
