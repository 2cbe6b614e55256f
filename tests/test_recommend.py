# -*- coding: utf-8 -*-
"""
선택 정책(recommend) 테스트
"""
import pytest

from src.models import Status
from src.stallscore import (
    DESPERATE_MESSAGE,
    EXCLUSION_REASON,
    FULL_MESSAGE,
    OPTIMAL_MESSAGE,
    recommend,
)
from src.utils import InvalidConfigurationError


class TestTerminalStates:

    @pytest.mark.parametrize("n", [2, 3, 5, 10])
    def test_full_row(self, n):
        result = recommend(n, list(range(1, n + 1)), False)
        assert result.status is Status.FULL
        assert result.recommendation is None
        assert result.message == FULL_MESSAGE
        assert result.scores == ()
        assert result.all_scores == ()
        assert result.best_score is None

    @pytest.mark.parametrize("n", [2, 3, 4, 5, 8, 10])
    def test_empty_row_picks_an_end(self, n):
        result = recommend(n, [], False)
        assert result.status is Status.OPTIMAL
        assert result.message == OPTIMAL_MESSAGE
        assert result.recommendation in {1, n}
        # ends tie by symmetry; lowest position wins
        assert result.recommendation == 1
        assert result.best_score.composite == max(s.composite for s in result.all_scores)

    def test_empty_row_best_composite(self):
        assert recommend(5, [], False).best_score.composite == 87
        assert recommend(2, [], False).best_score.composite == 65

    def test_single_station_row(self):
        result = recommend(1, [], False)
        assert result.recommendation == 1
        assert result.status is Status.OPTIMAL


class TestSelectionPolicy:

    def test_antisocial_option_excluded(self, both_ends_taken):
        """4번은 점수가 가장 높지만 다음 사람을 곤란하게 하므로 제외된다."""
        result = recommend(**both_ends_taken)

        assert result.status is Status.SOCIALLY_AWARE
        assert result.recommendation == 3
        assert [s.position for s in result.scores] == [3, 5]

        assert len(result.excluded_options) == 1
        excluded = result.excluded_options[0]
        assert excluded.position == 4
        assert excluded.excluded is True
        assert excluded.exclusion_reason == EXCLUSION_REASON
        assert excluded.next_user.acceptable == 0
        assert excluded.next_user.total == 4
        assert excluded.composite > result.best_score.composite

    def test_all_scores_keep_position_order_and_flags(self, both_ends_taken):
        result = recommend(**both_ends_taken)
        assert [s.position for s in result.all_scores] == [2, 3, 4, 5, 6]
        flagged = [s.position for s in result.all_scores if s.excluded]
        assert flagged == [4]

    def test_message_follows_description_tier(self, both_ends_taken):
        result = recommend(**both_ends_taken)
        assert result.best_score.composite == 39
        assert result.message == "Critical — Protocol Violation Imminent"

    def test_desperate_single_option(self):
        result = recommend(3, [1, 2], False)
        assert result.status is Status.DESPERATE
        assert result.recommendation == 3
        assert result.message == DESPERATE_MESSAGE.format(position=3)
        assert "Position #3" in result.message

    def test_middlemist_configuration(self, middlemist_config):
        result = recommend(**middlemist_config)
        assert [s.position for s in result.all_scores] == [1, 3]
        first, third = result.all_scores
        assert first.breakdown.edge == 100
        assert third.breakdown.edge == 100
        assert first.composite == third.composite
        assert result.recommendation in {1, 3}
        assert result.status is Status.DESPERATE
        # both strand the next arrival, but there is no alternative to prefer
        assert result.excluded_options == ()

    def test_dividers_lift_desperate_status(self, middlemist_config):
        result = recommend(3, [2], True)
        assert result.status is Status.NORMAL
        assert result.best_score.composite == 43
        assert result.message == "Suboptimal — Elevated Social Stress Anticipated"
        assert result.excluded_options == ()

    def test_buffer_compliant_preferred_even_if_antisocial(self):
        """완충 구역을 지키는 후보가 비사회적이어도 인접 자리보다 우선한다."""
        result = recommend(3, [1], False)
        assert result.status is Status.NORMAL
        assert result.recommendation == 3
        assert [s.position for s in result.scores] == [3]
        assert result.excluded_options == ()

    def test_scores_sorted_best_first(self):
        result = recommend(10, [4], False)
        composites = [s.composite for s in result.scores]
        assert composites == sorted(composites, reverse=True)
        assert result.best_score == result.scores[0]
        assert result.recommendation == result.scores[0].position

    def test_ties_broken_by_lowest_position(self):
        result = recommend(7, [4], False)
        tied = [s for s in result.scores if s.composite == result.best_score.composite]
        assert result.recommendation == min(s.position for s in tied)


class TestDeterminismAndInput:

    def test_repeated_calls_are_identical(self, both_ends_taken):
        first = recommend(**both_ends_taken)
        for _ in range(3):
            assert recommend(**both_ends_taken) == first
        assert recommend(**both_ends_taken).to_dict() == first.to_dict()

    def test_unsorted_occupied_accepted(self):
        assert recommend(7, [7, 1], False) == recommend(7, [1, 7], False)

    @pytest.mark.parametrize("station_count,occupied", [
        (0, []),
        (-3, []),
        (5, [0]),
        (5, [6]),
        (5, [2, 2]),
        (5, [1.5]),
        (5, [True]),
    ])
    def test_invalid_configuration_rejected(self, station_count, occupied):
        with pytest.raises(InvalidConfigurationError):
            recommend(station_count, occupied, False)

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError, match="outside 1..5"):
            recommend(5, [9], False)

    def test_to_dict_shape(self, both_ends_taken):
        data = recommend(**both_ends_taken).to_dict()
        assert data["status"] == "sociallyAware"
        assert data["recommendation"] == 3
        excluded = data["excludedOptions"][0]
        assert excluded["excluded"] is True
        assert excluded["exclusionReason"] == EXCLUSION_REASON
        details = excluded["breakdown"]["collectiveWelfareDetails"]
        assert details["nextUserViability"] == {"score": 0, "acceptable": 0, "total": 4}
        assert "excluded" not in data["bestScore"]
