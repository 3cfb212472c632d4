"""
TSP Solver - Visualization Module
Weight-matrix tables and tour plots for a CityGraph.
"""

import matplotlib.pyplot as plt
import pandas as pd
from typing import List, Optional

from tsp_core import CityGraph, Metric, Tour


ABSENT = "INF"


# ==========================================
# Tables
# ==========================================
def format_weight_table(graph: CityGraph, metric, sort_by_name: bool = False) -> pd.DataFrame:
    """
    Build the weight matrix for one metric as a DataFrame labelled by city name.

    Missing routes (including the diagonal) show as "INF" so they can never
    be mistaken for a zero weight.

    Args:
        graph: The graph to display
        metric: Metric or criterion name
        sort_by_name: Order rows/columns by city name instead of insertion

    Returns:
        A square DataFrame of floats and "INF" markers
    """
    metric = Metric.parse(metric)
    cities = graph.sorted_by_name() if sort_by_name else graph.cities_by_insertion()
    indices = [graph.index_of(city.name) for city in cities]
    names = [city.name for city in cities]

    rows = []
    for i in indices:
        row = []
        for j in indices:
            value = graph.weight_between(i, j, metric)
            row.append(ABSENT if value is None else round(value, 2))
        rows.append(row)

    return pd.DataFrame(rows, index=names, columns=names, dtype=object)


def render_weight_tables(graph: CityGraph, sort_by_name: bool = False) -> str:
    """Text rendering of the distance, cost and time matrices."""
    if graph.is_empty():
        return "No cities to display."

    blocks = []
    for metric in Metric:
        table = format_weight_table(graph, metric, sort_by_name=sort_by_name)
        blocks.append(f"{metric.label} Matrix:\n{table.to_string()}")
    return "\n\n".join(blocks)


def format_tour(graph: CityGraph, tour: Tour) -> str:
    return " -> ".join(tour.labels(graph))


# ==========================================
# Plots
# ==========================================
class TSPVisualizer:
    """Plot tours on the city coordinates."""

    def __init__(self, figsize=(12, 8)):
        self.figsize = figsize

    def _draw(self, ax, graph: CityGraph, tour: Tour, show_arrows: bool):
        cities = [graph.city(i) for i in tour.order]
        x_coords = [city.x for city in cities]
        y_coords = [city.y for city in cities]

        # Every city, including any the tour never reached
        all_cities = graph.cities_by_insertion()
        ax.scatter([c.x for c in all_cities], [c.y for c in all_cities],
                   c='red', s=200, zorder=3, edgecolors='darkred', linewidth=2)

        for a, b in tour.edges():
            style = 'b-' if graph.has_route(a, b) else 'r--'
            ca, cb = graph.city(a), graph.city(b)
            ax.plot([ca.x, cb.x], [ca.y, cb.y], style, linewidth=2, alpha=0.6, zorder=1)

            if show_arrows:
                mid_x = (ca.x + cb.x) / 2
                mid_y = (ca.y + cb.y) / 2
                dx = cb.x - ca.x
                dy = cb.y - ca.y
                ax.annotate('',
                            xy=(mid_x + dx * 0.1, mid_y + dy * 0.1),
                            xytext=(mid_x - dx * 0.1, mid_y - dy * 0.1),
                            arrowprops=dict(arrowstyle='->', color='blue', lw=2, alpha=0.7))

        for city in all_cities:
            ax.annotate(city.name, (city.x, city.y), fontsize=9,
                        xytext=(6, 6), textcoords='offset points')

        # Highlight start city
        ax.scatter([x_coords[0]], [y_coords[0]], c='green', s=300, zorder=4,
                   marker='*', edgecolors='darkgreen', linewidth=2)
        ax.grid(True, alpha=0.3)
        ax.set_aspect('equal')

    def plot_tour(
        self,
        graph: CityGraph,
        tour: Tour,
        title: str = "TSP Tour",
        show_arrows: bool = True,
        save_path: Optional[str] = None,
        show: bool = True,
    ):
        """
        Plot a single tour.

        Args:
            graph: Graph the tour was built on
            tour: The tour to visualize
            title: Plot title
            show_arrows: Show direction arrows on edges
            save_path: Optional path to save the figure
            show: Call plt.show() when done
        """
        fig, ax = plt.subplots(figsize=self.figsize)

        if len(tour) == 0:
            ax.text(0.5, 0.5, 'No cities in tour', ha='center', va='center', fontsize=16)
            return fig

        self._draw(ax, graph, tour, show_arrows)

        ax.set_title(f"{title}\nTotal {tour.metric.label}: {tour.total:.2f}",
                     fontsize=14, weight='bold')
        ax.set_xlabel('X Coordinate', fontsize=12)
        ax.set_ylabel('Y Coordinate', fontsize=12)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Tour saved to {save_path}")

        if show:
            plt.show()
        return fig

    def plot_comparison(
        self,
        graph: CityGraph,
        tours: List[Tour],
        titles: List[str],
        save_path: Optional[str] = None,
        show: bool = True,
    ):
        """
        Plot multiple tours side by side for comparison.

        Args:
            graph: Graph the tours were built on
            tours: List of tours to compare
            titles: List of titles for each tour
            save_path: Optional path to save the figure
            show: Call plt.show() when done
        """
        n_tours = len(tours)
        fig, axes = plt.subplots(1, n_tours, figsize=(6 * n_tours, 6))

        if n_tours == 1:
            axes = [axes]

        for ax, tour, title in zip(axes, tours, titles):
            if len(tour) == 0:
                ax.text(0.5, 0.5, 'No cities', ha='center', va='center')
                continue

            self._draw(ax, graph, tour, show_arrows=False)
            ax.set_title(f"{title}\n{tour.metric.label}: {tour.total:.2f}",
                         fontsize=12, weight='bold')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Comparison saved to {save_path}")

        if show:
            plt.show()
        return fig
