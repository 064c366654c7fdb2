# assinaturas/core/charts.py
import io
from typing import List, Union

import matplotlib
matplotlib.use("Agg")  # renderiza sem display (servidor)
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import pandas as pd

from assinaturas.core.models import CategoryTotal

# Configurações globais para os gráficos (cores, fontes, etc.)
plt.style.use('seaborn-v0_8-darkgrid')
plt.rcParams['font.family'] = 'sans-serif'
plt.rcParams['font.size'] = 10
plt.rcParams['axes.labelsize'] = 12
plt.rcParams['axes.titlesize'] = 14

COLORS = ['#1f77b4', '#ff7f0e', '#2ca02c', '#d62728', '#9467bd', '#8c564b', '#e377c2', '#7f7f7f', '#bcbd22', '#17becf']


def breakdown_frame(breakdown: List[CategoryTotal]) -> pd.DataFrame:
    """DataFrame (categoria, valor, percentual) na ordem do breakdown."""
    df = pd.DataFrame(
        [{'categoria': item.category, 'valor': float(item.amount)} for item in breakdown],
        columns=['categoria', 'valor'],
    )
    total = df['valor'].sum()
    df['percentual'] = (df['valor'] / total * 100) if total > 0 else 0.0
    return df


def bar_labels(df: pd.DataFrame, currency_symbol: str = "R$") -> List[str]:
    """Rótulos das barras: valor e participação no total ("R$55.90 (35.9%)")."""
    return [f"{currency_symbol}{valor:.2f} ({pct:.1f}%)" for valor, pct in zip(df['valor'], df['percentual'])]


def generate_category_chart(breakdown: List[CategoryTotal], currency_symbol: str = "R$") -> Union[io.BytesIO, None]:
    """Gera um gráfico de barras do custo mensal por categoria."""
    df = breakdown_frame(breakdown)
    df = df[df['valor'] > 0]
    if df.empty:
        return None

    fig, ax = plt.subplots(figsize=(12, 7))
    try:
        bars = ax.bar(df['categoria'], df['valor'], color=COLORS)

        ax.set_title('Custo Mensal por Categoria', fontsize=16, fontweight='bold')
        ax.set_ylabel(f'Valor ({currency_symbol})')
        ax.set_xlabel('Categoria')
        plt.setp(ax.get_xticklabels(), rotation=45, ha='right')
        ax.grid(axis='y', linestyle='--', alpha=0.7)

        ax.bar_label(bars, labels=bar_labels(df, currency_symbol), fontsize=8, padding=3)
        ax.yaxis.set_major_formatter(mticker.FormatStrFormatter(f'{currency_symbol}%.2f'))

        fig.tight_layout()

        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=150)
        buf.seek(0)
    finally:
        plt.close(fig)
    return buf
