"""
Tests for read-side dashboard queries.
"""

from datetime import date, datetime, timedelta

from coachai.core import queries
from coachai.models import (
    AnalysisResult,
    DailyCalorieEntry,
    Profile,
    ScheduledWorkout,
    Session,
    WeightEntry,
)


class TestUpcomingWorkouts:

    def _profile(self):
        return Profile(
            profile_id="a",
            scheduled_workouts=[
                ScheduledWorkout(date="2024-01-11", time="07:00", exercise="Tomorrow"),
                ScheduledWorkout(date="2024-01-09", time="08:00", exercise="Yesterday"),
                ScheduledWorkout(date="2024-01-10", time="18:00", exercise="Tonight"),
                ScheduledWorkout(date="2024-01-10", time="08:00", exercise="This morning"),
                ScheduledWorkout(date="soon", time="??", exercise="Unparsable"),
            ],
        )

    def test_future_only_soonest_first(self, clock):
        upcoming = queries.upcoming_workouts(self._profile(), clock())
        assert [w.exercise for w in upcoming] == ["Tonight", "Tomorrow"]

    def test_limit(self, clock):
        upcoming = queries.upcoming_workouts(self._profile(), clock(), limit=1)
        assert [w.exercise for w in upcoming] == ["Tonight"]

    def test_naive_now(self):
        upcoming = queries.upcoming_workouts(self._profile(), datetime(2024, 1, 10, 19, 0))
        assert [w.exercise for w in upcoming] == ["Tomorrow"]


class TestSeriesViews:

    def test_calorie_chart_last_seven(self):
        start = date(2024, 1, 1)
        profile = Profile(
            profile_id="a",
            daily_calories_log=[
                DailyCalorieEntry(date=start + timedelta(days=i), calories=100 * i) for i in range(10)
            ],
        )
        chart = queries.calorie_chart(profile)
        assert len(chart) == 7
        assert chart[0].date == date(2024, 1, 4)
        assert chart[-1].date == date(2024, 1, 10)
        assert queries.calorie_chart(profile, days=0) == []

    def test_recent_weights(self):
        profile = Profile(
            profile_id="a",
            weight_history=[WeightEntry(date=date(2024, 1, d), weight=80 - d) for d in range(1, 13)],
        )
        weights = queries.recent_weights(profile)
        assert len(weights) == 10
        assert weights[-1].weight == 68


class TestSessionViews:

    def _sessions(self, make_payload, count):
        sessions = []
        for i in range(count):
            def mutate(p, i=i):
                p["personalized_plan"]["weekly_focus"] = f"Focus {i}"
            sessions.append(Session(
                id=f"s{i}",
                created_at=datetime(2024, 1, 10, 12, 0),
                data=AnalysisResult.model_validate(make_payload(mutate)),
            ))
        return sessions

    def test_recent_sessions(self, make_payload):
        sessions = self._sessions(make_payload, 5)
        assert [s.id for s in queries.recent_sessions(sessions)] == ["s0", "s1", "s2"]

    def test_latest_plan(self, make_payload):
        sessions = self._sessions(make_payload, 2)
        assert queries.latest_plan(sessions).weekly_focus == "Focus 0"
        assert queries.latest_plan([]) is None
