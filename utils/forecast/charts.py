# utils/forecast/charts.py

"""
Charts for Menu Forecast
Plotly visualizations
"""

import logging

import pandas as pd
import plotly.graph_objects as go

from .constants import DATA_TYPES, UI_CONFIG
from .formatters import format_quantity

logger = logging.getLogger(__name__)


class ForecastCharts:
    """Chart generator for Menu Forecast"""

    def __init__(self):
        self.chart_height = UI_CONFIG.get('chart_height', 400)

    def create_forecast_bar(self, chart_df: pd.DataFrame, title: str = "Menu Forecast Analysis") -> go.Figure:
        """Grouped bars of real vs forecast sales per date"""

        if chart_df.empty:
            return self._empty_chart("No forecast data available")

        labels = [d.strftime('%b %d, %Y') for d in chart_df['date']]

        fig = go.Figure()
        for data_type in ('real', 'forecast'):
            cfg = DATA_TYPES[data_type]
            fig.add_trace(go.Bar(
                x=labels,
                y=chart_df[data_type],
                name=cfg['label'],
                marker_color=cfg['color'],
                text=[format_quantity(v) if v else '' for v in chart_df[data_type]],
                textposition='outside',
                hovertemplate=f"%{{x}}<br>{cfg['label']}: %{{y:,.0f}}<extra></extra>"
            ))

        fig.update_layout(
            title=title,
            barmode='group',
            xaxis_title="Date",
            yaxis_title="Total Sales",
            height=self.chart_height,
            legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
            margin=dict(t=60, b=60, l=60, r=20)
        )

        return fig

    def _empty_chart(self, message: str) -> go.Figure:
        fig = go.Figure()
        fig.add_annotation(
            text=message,
            xref="paper", yref="paper",
            x=0.5, y=0.5,
            showarrow=False,
            font=dict(size=14, color="#6B7280")
        )
        fig.update_layout(
            height=self.chart_height,
            xaxis=dict(visible=False),
            yaxis=dict(visible=False)
        )
        return fig


def get_charts() -> ForecastCharts:
    """Get charts instance"""
    return ForecastCharts()
