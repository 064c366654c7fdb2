# tests/test_charts.py
import unittest
from unittest.mock import MagicMock, patch
from decimal import Decimal

from assinaturas.core import charts
from assinaturas.core.models import CategoryTotal


class TestCharts(unittest.TestCase):
    def test_breakdown_frame(self):
        df = charts.breakdown_frame([CategoryTotal("Streaming", Decimal(30)), CategoryTotal("Jogos", Decimal(10))])
        self.assertEqual(list(df['categoria']), ["Streaming", "Jogos"])
        self.assertEqual(list(df['percentual']), [75.0, 25.0])

    def test_empty_breakdown_has_no_chart(self):
        self.assertIsNone(charts.generate_category_chart([]))
        self.assertIsNone(charts.generate_category_chart([CategoryTotal("Zerada", Decimal(0))]))

    def test_generates_png(self):
        buf = charts.generate_category_chart([CategoryTotal("Streaming", Decimal("55.90"))])
        self.assertIsNotNone(buf)
        self.assertEqual(buf.read(8), b'\x89PNG\r\n\x1a\n')

    def test_bar_labels_show_value_and_share(self):
        df = charts.breakdown_frame([CategoryTotal("Streaming", Decimal(30)), CategoryTotal("Jogos", Decimal(10))])
        self.assertEqual(charts.bar_labels(df, "R$"), ["R$30.00 (75.0%)", "R$10.00 (25.0%)"])

    @patch("assinaturas.core.charts.plt")
    def test_figure_is_closed_when_rendering_fails(self, mock_plt):
        fig, ax = MagicMock(), MagicMock()
        fig.savefig.side_effect = RuntimeError("backend indisponível")
        mock_plt.subplots.return_value = (fig, ax)

        with self.assertRaises(RuntimeError):
            charts.generate_category_chart([CategoryTotal("Streaming", Decimal("55.90"))])

        mock_plt.close.assert_called_once_with(fig)
