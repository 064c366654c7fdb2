# tests/test_recurrence.py
import unittest
import datetime
from decimal import Decimal
from unittest.mock import patch

from assinaturas.core.models import Subscription
from assinaturas.core.periods import CANONICAL_PERIODS
from assinaturas.core.recurrence import (
    days_until, default_projection_count, next_occurrence, project_occurrences, upcoming_charges
)
from assinaturas.utils.date_utils import InvalidDateError, add_months

D = datetime.date


def make_sub(name, billing_date, period, active=True, amount="10.00"):
    return Subscription(
        name=name, amount=Decimal(amount), billing_date=billing_date,
        renewal_period=period, active=active,
    )


class TestNextOccurrence(unittest.TestCase):
    def test_future_anchor_is_returned_unchanged(self):
        self.assertEqual(next_occurrence(D(2024, 5, 10), "mensal", D(2024, 3, 1)), D(2024, 5, 10))

    def test_anchor_today_is_due_today(self):
        for period in CANONICAL_PERIODS:
            with self.subTest(period=period):
                self.assertEqual(next_occurrence(D(2024, 3, 1), period, D(2024, 3, 1)), D(2024, 3, 1))

    def test_daily_exact_multiple(self):
        self.assertEqual(next_occurrence(D(2024, 1, 1), "daily", D(2024, 3, 1)), D(2024, 3, 1))

    def test_daily_ignores_time_of_day(self):
        result = next_occurrence(
            datetime.datetime(2024, 1, 1, 15, 0), "diario", datetime.datetime(2024, 3, 1, 9, 0)
        )
        self.assertEqual(result, D(2024, 3, 1))

    def test_daily_long_overdue_is_closed_form(self):
        # Dezenas de anos de atraso não podem virar iteração dia a dia
        self.assertEqual(next_occurrence(D(1950, 1, 1), "diario", D(2024, 3, 1)), D(2024, 3, 1))

    def test_weekly_partial_period(self):
        # 2024-01-01 é segunda; 2024-01-10 é quarta -> próxima segunda é 15
        self.assertEqual(next_occurrence(D(2024, 1, 1), "semanal", D(2024, 1, 10)), D(2024, 1, 15))

    def test_weekly_exact_multiple(self):
        self.assertEqual(next_occurrence(D(2024, 1, 1), "weekly", D(2024, 1, 15)), D(2024, 1, 15))

    def test_monthly_month_end_clamping_leap_year(self):
        self.assertEqual(next_occurrence(D(2024, 1, 31), "monthly", D(2024, 2, 15)), D(2024, 2, 29))

    def test_monthly_month_end_clamping_common_year(self):
        self.assertEqual(next_occurrence(D(2023, 1, 31), "monthly", D(2023, 2, 15)), D(2023, 2, 28))

    def test_monthly_does_not_drift_after_clamping(self):
        # 31/01 -> 29/02 -> 31/03, não 29/03
        self.assertEqual(next_occurrence(D(2024, 1, 31), "mensal", D(2024, 3, 1)), D(2024, 3, 31))

    def test_monthly_same_month_later_day(self):
        self.assertEqual(next_occurrence(D(2023, 6, 20), "mensal", D(2024, 3, 10)), D(2024, 3, 20))

    def test_monthly_same_month_earlier_day(self):
        self.assertEqual(next_occurrence(D(2023, 6, 5), "mensal", D(2024, 3, 10)), D(2024, 4, 5))

    def test_quarterly(self):
        self.assertEqual(next_occurrence(D(2023, 11, 30), "trimestral", D(2024, 1, 10)), D(2024, 2, 29))
        self.assertEqual(next_occurrence(D(2023, 1, 15), "quarterly", D(2024, 1, 16)), D(2024, 4, 15))

    def test_yearly_leap_day_anchor(self):
        self.assertEqual(next_occurrence(D(2024, 2, 29), "anual", D(2025, 1, 1)), D(2025, 2, 28))
        self.assertEqual(next_occurrence(D(2024, 2, 29), "anual", D(2027, 3, 1)), D(2028, 2, 29))

    def test_unknown_period_uses_monthly(self):
        with self.assertLogs("assinaturas.core.periods", level="WARNING"):
            self.assertEqual(next_occurrence(D(2024, 1, 10), "quinzenal", D(2024, 2, 5)), D(2024, 2, 10))

    def test_accepts_iso_strings(self):
        self.assertEqual(next_occurrence("2024-01-31", "Mensal", "2024-02-15"), D(2024, 2, 29))

    def test_invalid_date_raises(self):
        with self.assertRaises(InvalidDateError):
            next_occurrence("31/01/2024", "mensal", D(2024, 2, 15))
        with self.assertRaises(InvalidDateError):
            next_occurrence(D(2024, 1, 31), "mensal", "hoje")

    @patch("assinaturas.utils.date_utils.today", return_value=D(2024, 2, 15))
    def test_today_defaults_to_current_date(self, mock_today):
        self.assertEqual(next_occurrence(D(2024, 1, 31), "mensal"), D(2024, 2, 29))
        mock_today.assert_called_once()

    def test_result_is_on_or_after_today_and_on_the_grid(self):
        anchors = [D(2020, 1, 31), D(2021, 2, 28), D(2020, 2, 29), D(2022, 8, 15)]
        todays = [D(2024, 2, 1), D(2024, 2, 29), D(2024, 12, 31), D(2025, 3, 1)]
        months_per_step = {"monthly": 1, "quarterly": 3, "yearly": 12}
        for anchor in anchors:
            for today in todays:
                for period in CANONICAL_PERIODS:
                    with self.subTest(anchor=anchor, today=today, period=period):
                        result = next_occurrence(anchor, period, today)
                        self.assertGreaterEqual(result, today)
                        if period in months_per_step:
                            step = months_per_step[period]
                            grid = [add_months(anchor, k * step) for k in range(0, 200)]
                            self.assertIn(result, grid)
                            # e é o primeiro ponto da grade em/depois de hoje
                            self.assertEqual(result, min(g for g in grid if g >= today))
                        else:
                            step = 1 if period == "daily" else 7
                            self.assertEqual((result - anchor).days % step, 0)
                            self.assertLess((result - today).days, step)


class TestProjectOccurrences(unittest.TestCase):
    def test_default_count_daily_is_seven(self):
        dates = project_occurrences(D(2024, 1, 1), "diario", D(2024, 3, 1))
        self.assertEqual(len(dates), 7)
        self.assertEqual(dates[0], D(2024, 3, 1))
        self.assertEqual(dates[-1], D(2024, 3, 7))

    def test_default_count_monthly_is_three_months_apart(self):
        dates = project_occurrences(D(2023, 6, 15), "mensal", D(2024, 3, 1))
        self.assertEqual(dates, [D(2024, 3, 15), D(2024, 4, 15), D(2024, 5, 15)])
        for earlier, later in zip(dates, dates[1:]):
            self.assertEqual(add_months(earlier, 1), later)

    def test_default_projection_count(self):
        self.assertEqual(default_projection_count("Diário"), 7)
        self.assertEqual(default_projection_count("daily"), 7)
        self.assertEqual(default_projection_count("semanal"), 3)
        self.assertEqual(default_projection_count("anual"), 3)
        self.assertEqual(default_projection_count("quinzenal"), 3)

    def test_first_item_matches_next_occurrence(self):
        for period in CANONICAL_PERIODS:
            with self.subTest(period=period):
                dates = project_occurrences(D(2023, 1, 31), period, D(2024, 2, 10))
                self.assertEqual(dates[0], next_occurrence(D(2023, 1, 31), period, D(2024, 2, 10)))

    def test_month_end_anchor_does_not_drift(self):
        dates = project_occurrences(D(2024, 1, 31), "monthly", D(2024, 2, 1), count=3)
        self.assertEqual(dates, [D(2024, 2, 29), D(2024, 3, 31), D(2024, 4, 30)])

    def test_weekly_and_quarterly_and_yearly(self):
        self.assertEqual(
            project_occurrences(D(2024, 1, 1), "semanal", D(2024, 1, 10)),
            [D(2024, 1, 15), D(2024, 1, 22), D(2024, 1, 29)],
        )
        self.assertEqual(
            project_occurrences(D(2023, 1, 15), "trimestral", D(2024, 1, 16)),
            [D(2024, 4, 15), D(2024, 7, 15), D(2024, 10, 15)],
        )
        self.assertEqual(
            project_occurrences(D(2020, 2, 29), "anual", D(2024, 3, 1)),
            [D(2025, 2, 28), D(2026, 2, 28), D(2027, 2, 28)],
        )

    def test_future_anchor_starts_at_anchor(self):
        self.assertEqual(
            project_occurrences(D(2024, 5, 10), "mensal", D(2024, 3, 1), count=2),
            [D(2024, 5, 10), D(2024, 6, 10)],
        )

    def test_explicit_count(self):
        self.assertEqual(len(project_occurrences(D(2024, 1, 1), "diario", D(2024, 3, 1), count=3)), 3)
        self.assertEqual(len(project_occurrences(D(2024, 1, 1), "mensal", D(2024, 3, 1), count=12)), 12)

    def test_non_positive_count_is_empty(self):
        self.assertEqual(project_occurrences(D(2024, 1, 1), "mensal", D(2024, 3, 1), count=0), [])
        self.assertEqual(project_occurrences(D(2024, 1, 1), "mensal", D(2024, 3, 1), count=-2), [])

    def test_restartable(self):
        first = project_occurrences(D(2023, 1, 31), "mensal", D(2024, 2, 10))
        second = project_occurrences(D(2023, 1, 31), "mensal", D(2024, 2, 10))
        self.assertEqual(first, second)


class TestUpcomingCharges(unittest.TestCase):
    def test_window_filter_and_order(self):
        today = D(2024, 3, 1)
        subs = [
            make_sub("Spotify", D(2024, 1, 5), "mensal"),      # 05/03 -> dentro
            make_sub("Netflix", D(2024, 1, 2), "mensal"),      # 02/03 -> dentro
            make_sub("Jornal", D(2024, 1, 20), "mensal"),      # 20/03 -> fora
            make_sub("Academia", D(2024, 1, 3), "mensal", active=False),
            make_sub("Café", D(2024, 2, 1), "diario"),         # hoje
            make_sub("Seguro", D(2024, 3, 8), "anual"),        # 08/03 -> limite da janela
        ]
        charges = upcoming_charges(subs, today, window_days=7)
        self.assertEqual(
            [(c.subscription.name, c.due_date) for c in charges],
            [("Café", D(2024, 3, 1)), ("Netflix", D(2024, 3, 2)),
             ("Spotify", D(2024, 3, 5)), ("Seguro", D(2024, 3, 8))],
        )

    def test_empty(self):
        self.assertEqual(upcoming_charges([], D(2024, 3, 1)), [])


class TestDaysUntil(unittest.TestCase):
    def test_days_until(self):
        self.assertEqual(days_until(D(2024, 3, 4), D(2024, 3, 1)), 3)
        self.assertEqual(days_until("2024-03-01", "2024-03-01"), 0)
        self.assertEqual(days_until(D(2024, 2, 28), D(2024, 3, 1)), -2)
