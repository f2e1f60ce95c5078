# tests/test_compliance.py
import pytest

from habitat.compliance import ComplianceScorer, ScoringConfig, compute_compliance
from habitat.errors import MalformedMissionParametersError
from habitat.models import Destination, MissionParameters, Priority

ALL_CATEGORIES = {
    "volume_per_person", "crew_quarters", "essential_rooms", "hygiene_stations",
    "noise_separation", "adjacency_prohibition", "emergency_access",
}


@pytest.fixture
def mission():
    return MissionParameters(crew_size=4, duration_days=60)


@pytest.fixture
def volume_layout(make_layout):
    # 4 crew quarters (12.5 m^3) + 5 storage (20 m^3) = 150 m^3
    quarters = [("crew_quarters", 3.0 * i, 0) for i in range(4)]
    storage = [("storage", 5.0 * i, 5) for i in range(5)]
    return make_layout(quarters + storage)


def test_weights_sum_to_100():
    cfg = ScoringConfig()
    total = (cfg.volume_weight + cfg.crew_quarters_weight + cfg.essential_weight
             + cfg.hygiene_weight + cfg.noise_weight + cfg.adjacency_weight
             + cfg.access_weight)
    assert total == 100


def test_empty_layout_scores_zero(make_layout, mission):
    report = compute_compliance(make_layout(), mission)
    assert report.overall_score == 0
    assert set(report.categories) == ALL_CATEGORIES
    assert report.passed == []
    assert set(report.failed) == ALL_CATEGORIES


def test_volume_scenario(volume_layout, mission):
    report = compute_compliance(volume_layout, mission)
    volume = report.categories["volume_per_person"]
    assert volume.current == pytest.approx(26.25)
    assert volume.required == 25.0
    assert volume.passed is True
    assert volume.raw_score == pytest.approx(25.0)


def test_volume_scenario_overall(volume_layout, mission):
    # volume 25 + quarters 20 + 1/7 essential; noise and adjacency have no pairs
    report = compute_compliance(volume_layout, mission)
    assert report.overall_score == 48
    assert "noise_separation" in report.failed
    assert "adjacency_prohibition" in report.failed


def test_volume_deficit_is_partial(make_layout, mission):
    layout = make_layout([("storage", 0, 0)])
    volume = compute_compliance(layout, mission).categories["volume_per_person"]
    # 20 * 0.7 / 4 = 3.5 of 25
    assert volume.passed is False
    assert volume.raw_score == pytest.approx(25 * 3.5 / 25)


def test_crew_quarters_partial_credit(make_layout, mission):
    layout = make_layout([("crew_quarters", 0, 0), ("crew_quarters", 3, 0)])
    quarters = compute_compliance(layout, mission).categories["crew_quarters"]
    assert quarters.raw_score == pytest.approx(10.0)
    assert quarters.percentage == 50.0
    assert quarters.passed is False


def test_crew_quarters_capped(make_layout):
    layout = make_layout([("crew_quarters", 3.0 * i, 0) for i in range(3)])
    mission = MissionParameters(crew_size=2, duration_days=10)
    quarters = compute_compliance(layout, mission).categories["crew_quarters"]
    assert quarters.raw_score == pytest.approx(20.0)
    assert quarters.passed is True


def test_essential_rooms(make_layout, mission):
    types = ["hygiene", "galley", "diningroom", "exercise", "workstation", "medical"]
    layout = make_layout([(t, 5.0 * i, 10) for i, t in enumerate(types)])
    essential = compute_compliance(layout, mission).categories["essential_rooms"]
    assert essential.current == 6
    assert essential.raw_score == pytest.approx(20 * 6 / 7)
    assert essential.passed is False
    assert essential.details == ["Missing Storage"]


def test_hygiene_stations(make_layout, mission):
    layout = make_layout([("hygiene", 0, 0)])
    hygiene = compute_compliance(layout, mission).categories["hygiene_stations"]
    assert hygiene.required == 2
    assert hygiene.raw_score == pytest.approx(7.5)


def test_noise_separation_boundary_passes(make_layout, mission):
    # Centres exactly 3.0 m apart
    layout = make_layout([("exercise", 0, 0.25), ("crew_quarters", 3.5, 0)])
    noise = compute_compliance(layout, mission).categories["noise_separation"]
    assert noise.current == pytest.approx(3.0)
    assert noise.passed is True
    assert noise.raw_score == 5


def test_noise_separation_closer_fails(make_layout, mission):
    layout = make_layout([("exercise", 0, 0.25), ("crew_quarters", 3.0, 0)])
    noise = compute_compliance(layout, mission).categories["noise_separation"]
    assert noise.passed is False
    assert noise.raw_score == 0
    assert len(noise.details) == 1


def test_noise_threshold_is_configurable(make_layout, mission):
    layout = make_layout([("exercise", 0, 0.25), ("crew_quarters", 3.5, 0)])
    report = compute_compliance(layout, mission, ScoringConfig(noise_min_distance=4.0))
    assert report.categories["noise_separation"].passed is False


def test_noise_separation_without_pairs(make_layout, mission):
    layout = make_layout([("storage", 0, 0)])
    noise = compute_compliance(layout, mission).categories["noise_separation"]
    assert noise.passed is False
    assert noise.raw_score == 0
    assert noise.message.startswith("Nothing to evaluate")


def test_noise_separation_needs_both_sides(make_layout, mission):
    layout = make_layout([("crew_quarters", 0, 0), ("crew_quarters", 10, 10)])
    assert compute_compliance(layout, mission).categories["noise_separation"].passed is False


@pytest.mark.parametrize("x, y, passed", [
    (2.0, 0.0, False),   # shared wall
    (2.05, 0.0, False),  # gap within tolerance
    (2.5, 0.0, True),    # clear gap
    (2.0, 1.5, True),    # corner contact only
])
def test_adjacency_prohibition(make_layout, mission, x, y, passed):
    layout = make_layout([("galley", 0, 0), ("hygiene", x, y)])
    adjacency = compute_compliance(layout, mission).categories["adjacency_prohibition"]
    assert adjacency.passed is passed


def test_allowed_pair_may_touch(make_layout, mission):
    layout = make_layout([("galley", 0, 0), ("diningroom", 2.0, 0), ("hygiene", 20, 20)])
    adjacency = compute_compliance(layout, mission).categories["adjacency_prohibition"]
    assert adjacency.passed is True


def test_adjacency_without_incompatible_types(make_layout, mission):
    layout = make_layout([("galley", 0, 0), ("diningroom", 2.0, 0), ("storage", 10, 10)])
    adjacency = compute_compliance(layout, mission).categories["adjacency_prohibition"]
    assert adjacency.passed is False
    assert adjacency.raw_score == 0
    assert adjacency.message.startswith("Nothing to evaluate")


def test_storage_only_layout_earns_no_pass_fail_points(make_layout, mission):
    report = compute_compliance(make_layout([("storage", 0, 0)]), mission)
    assert report.passed == []
    # volume 3.5/25 of 25 + 1/7 of essential 20
    assert report.overall_score == round(3.5 + 20 / 7)


def test_emergency_access_without_medical(make_layout, mission):
    layout = make_layout([("storage", 0, 0)])
    access = compute_compliance(layout, mission).categories["emergency_access"]
    assert access.raw_score == 0
    assert access.passed is False


def test_emergency_access_fraction(make_layout, mission):
    layout = make_layout([("medical", 0, 0), ("storage", 25, 25)])
    access = compute_compliance(layout, mission).categories["emergency_access"]
    assert access.current == pytest.approx(0.5)
    assert access.raw_score == pytest.approx(5.0)
    assert access.passed is False


def test_emergency_access_all_reachable(make_layout, mission):
    layout = make_layout([("medical", 0, 0), ("storage", 3, 0), ("hygiene", 0, 3)])
    access = compute_compliance(layout, mission).categories["emergency_access"]
    assert access.current == pytest.approx(1.0)
    assert access.passed is True


def test_scoring_is_idempotent(volume_layout, mission):
    scorer = ComplianceScorer()
    first = scorer.score(volume_layout, mission)
    second = scorer.score(volume_layout, mission)
    assert first.model_dump() == second.model_dump()


def test_scoring_does_not_mutate(volume_layout, mission):
    before = volume_layout.model_copy(deep=True)
    compute_compliance(volume_layout, mission)
    assert volume_layout == before


def test_unknown_room_types_are_ignored(make_layout, mission):
    layout = make_layout([("ballroom", 0, 0)])
    assert compute_compliance(layout, mission).overall_score == 0


def test_destination_does_not_change_compliance(volume_layout):
    moon = MissionParameters(crew_size=4, duration_days=60, destination=Destination.MOON)
    mars = MissionParameters(crew_size=4, duration_days=60, destination=Destination.MARS)
    assert (compute_compliance(volume_layout, moon).overall_score
            == compute_compliance(volume_layout, mars).overall_score)


def test_malformed_crew_size_raises(volume_layout):
    mission = MissionParameters.model_construct(
        crew_size=0, duration_days=60, destination=Destination.MOON
    )
    with pytest.raises(MalformedMissionParametersError):
        compute_compliance(volume_layout, mission)


def test_empty_layout_recommendations(make_layout, mission):
    report = compute_compliance(make_layout(), mission)
    assert [r.category for r in report.recommendations] == [
        "volume_per_person", "essential_rooms", "emergency_access",
        "hygiene_stations", "adjacency_prohibition",
        "crew_quarters", "noise_separation",
    ]
    assert report.recommendations[0].priority == Priority.HIGH
