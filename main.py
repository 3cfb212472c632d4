"""
TSP Solver - Main Application
Load or generate a city graph and solve it with brute force and/or
nearest neighbor, under distance, cost or time.
"""

import argparse
import sys
from typing import Callable, List, Optional

from tsp_core import CityGraph, Metric, Tour, TSPError
from tour_solver import TourSolver
from data_generator import generate_random_graph, load_cities_file, load_routes_file
from visualization import TSPVisualizer, format_tour, render_weight_tables


# ================================
# CONFIGURATION
# ================================
BRUTE_FORCE_WARN_LIMIT = 10

SOLVER_NAMES = {
    'brute': "Brute Force",
    'nn': "Nearest Neighbor",
}


def report_tour(graph: CityGraph, tour: Tour, method: str):
    """Print a solved tour the way the menu and the CLI show it."""
    print(f"\n{method} tour {tour.metric.label.lower()} "
          f"({tour.metric.label} optimized): {tour.total:.2f}")
    print(f"Tour path: {format_tour(graph, tour)}")
    for message in tour.anomalies:
        print(f"Warning: {message}")
    print(f"Time taken for {method} TSP: {tour.elapsed * 1e6:.0f} microseconds.")


def run_solver(solver: TourSolver, name: str, metric: Metric, start: int) -> Tour:
    if name == 'brute':
        return solver.solve_exhaustive(metric, start)
    return solver.solve_nearest_neighbor(metric, start)


# ==========================================
# Interactive menu
# ==========================================
MENU = """
===== TSP Solver Menu =====
1. Load cities from file
2. Load routes from file
3. Add a city manually
4. Add a route manually
5. Display cities and routes
6. Solve TSP using Brute Force
7. Solve TSP using Nearest Neighbor
8. Sort cities by name
9. Exit"""


def _ask_number(prompt: str, input_fn: Callable[[str], str], non_negative: bool = False) -> float:
    while True:
        raw = input_fn(prompt)
        try:
            value = float(raw)
        except ValueError:
            print("Invalid input. Please enter a number.")
            continue
        if non_negative and value < 0:
            print("Invalid input. Please enter a non-negative number.")
            continue
        return value


def interactive_menu(
    graph: Optional[CityGraph] = None,
    input_fn: Callable[[str], str] = input,
    max_brute: int = BRUTE_FORCE_WARN_LIMIT,
) -> CityGraph:
    """
    Menu loop over a single graph. Returns the graph when the user exits.
    """
    graph = graph if graph is not None else CityGraph()
    solver = TourSolver(graph)
    sort_by_name = False

    while True:
        print(MENU)
        choice = input_fn("Enter your choice: ").strip()

        try:
            if choice == '1':
                load_cities_file(graph, input_fn("Enter the filename to load cities from: ").strip())

            elif choice == '2':
                load_routes_file(graph, input_fn("Enter the filename to load routes from: ").strip())

            elif choice == '3':
                name = input_fn("Enter city name: ").strip()
                x = _ask_number("Enter X coordinate: ", input_fn)
                y = _ask_number("Enter Y coordinate: ", input_fn)
                graph.add_city(name, x, y)
                print(f"City '{name}' added successfully.")

            elif choice == '4':
                src = input_fn("Enter the starting city name: ").strip()
                dst = input_fn("Enter the destination city name: ").strip()
                distance = _ask_number("Enter distance: ", input_fn, non_negative=True)
                cost = _ask_number("Enter cost: ", input_fn, non_negative=True)
                time_ = _ask_number("Enter time: ", input_fn, non_negative=True)
                graph.add_route(src, dst, distance, cost, time_)
                print(f"Route between '{src}' and '{dst}' added successfully.")

            elif choice == '5':
                print(render_weight_tables(graph, sort_by_name=sort_by_name))

            elif choice in ('6', '7'):
                if graph.is_empty():
                    print("No cities available. Please add cities first.")
                    continue
                try:
                    metric = Metric.parse(
                        input_fn("Enter optimization criterion (Distance, Cost, Time): "))
                except ValueError as e:
                    print(e)
                    continue
                start = graph.index_of(input_fn("Enter the starting city name: ").strip())

                if choice == '6':
                    if graph.size() > max_brute:
                        print(f"Warning: Brute Force approach may take a long time "
                              f"with more than {max_brute} cities.")
                        confirm = input_fn("Do you want to continue? (y/n): ").strip().lower()
                        if confirm != 'y':
                            continue
                    report_tour(graph, solver.solve_exhaustive(metric, start), "Brute Force")
                else:
                    report_tour(graph, solver.solve_nearest_neighbor(metric, start),
                                "Nearest Neighbor")

            elif choice == '8':
                sort_by_name = True
                print("Cities sorted by name.")

            elif choice == '9':
                print("Exiting the program. Goodbye!")
                return graph

            else:
                print("Invalid choice. Please enter a number between 1 and 9.")

        except (TSPError, ValueError, OSError) as e:
            print(f"Error: {e}")


# ==========================================
# Command line
# ==========================================
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsp-solver",
        description="TSP Solver - shortest tour by distance, cost or time",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a graph from files with both solvers, optimizing cost
  python main.py --cities cities.txt --routes routes.txt --criterion cost

  # Nearest neighbor on 30 random cities, starting at City_3
  python main.py --random 30 --solver nn --start City_3

  # Interactive menu
  python main.py --interactive
        """
    )

    parser.add_argument('--cities', type=str, help='City file: one "name x y" per line')
    parser.add_argument('--routes', type=str,
                        help='Route file: one "from to distance cost time" per line')
    parser.add_argument('--random', type=int, metavar='N',
                        help='Generate N random cities instead of loading files')
    parser.add_argument('--density', type=float, default=1.0,
                        help='Route probability for --random (default: 1.0, complete graph)')
    parser.add_argument('--seed', type=int, default=None, help='Seed for --random')

    parser.add_argument('--solver', choices=['brute', 'nn', 'both'], default='both',
                        help='Solver to run (default: both)')
    parser.add_argument('--criterion', type=str, default='distance',
                        help='Distance, Cost or Time (case-insensitive, default: distance)')
    parser.add_argument('--start', type=str, default=None,
                        help='Starting city name (default: first city)')
    parser.add_argument('--max-brute', type=int, default=BRUTE_FORCE_WARN_LIMIT,
                        help=f'Refuse brute force above this many cities '
                             f'(default: {BRUTE_FORCE_WARN_LIMIT})')
    parser.add_argument('--yes', action='store_true',
                        help='Run brute force even above --max-brute')

    parser.add_argument('--show-matrix', action='store_true',
                        help='Print the distance, cost and time matrices')
    parser.add_argument('--sort-by-name', action='store_true',
                        help='Order matrix rows/columns by city name')
    parser.add_argument('--plot', action='store_true', help='Plot the resulting tours')
    parser.add_argument('--save-plot', type=str, default=None,
                        help='Save the tour plot to this path')
    parser.add_argument('--interactive', action='store_true', help='Run the interactive menu')
    parser.add_argument('--quiet', action='store_true', help='Less loader output')

    return parser


def load_graph(args, parser: argparse.ArgumentParser) -> CityGraph:
    if args.random is not None:
        if args.random < 1:
            parser.error("--random must be at least 1")
        print(f"\nGenerating {args.random} random cities...")
        return generate_random_graph(args.random, density=args.density, seed=args.seed)

    if not args.cities:
        parser.error("either --cities or --random is required")

    graph = CityGraph()
    load_cities_file(graph, args.cities, verbose=not args.quiet)
    if args.routes:
        load_routes_file(graph, args.routes, verbose=not args.quiet)
    return graph


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the TSP solver application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.interactive:
        graph = CityGraph()
        try:
            if args.cities:
                load_cities_file(graph, args.cities, verbose=not args.quiet)
            if args.routes:
                load_routes_file(graph, args.routes, verbose=not args.quiet)
        except OSError as e:
            print(f"Error: {e}")
        interactive_menu(graph, max_brute=args.max_brute)
        return 0

    try:
        metric = Metric.parse(args.criterion)
    except ValueError as e:
        parser.error(str(e))

    try:
        graph = load_graph(args, parser)
    except OSError as e:
        print(f"Error: {e}")
        return 1

    if graph.is_empty():
        print("No cities available. Please add cities first.")
        return 1

    if args.show_matrix:
        print(render_weight_tables(graph, sort_by_name=args.sort_by_name))

    solver = TourSolver(graph)
    names = ['brute', 'nn'] if args.solver == 'both' else [args.solver]
    results = {}
    status = 0

    try:
        start = graph.index_of(args.start) if args.start else 0
    except TSPError as e:
        print(f"Error: {e}")
        return 1

    for name in names:
        if name == 'brute' and graph.size() > args.max_brute and not args.yes:
            print(f"Warning: Brute Force approach may take a long time with more than "
                  f"{args.max_brute} cities. Skipping (use --yes to run anyway).")
            status = 1
            continue
        try:
            tour = run_solver(solver, name, metric, start)
        except TSPError as e:
            print(f"\n{SOLVER_NAMES[name]}: {e}")
            status = 1
            continue
        results[SOLVER_NAMES[name]] = tour
        report_tour(graph, tour, SOLVER_NAMES[name])

    if len(results) > 1:
        print(f"\n{'Method':<20} {metric.label:<15} {'Time (s)':<15}")
        print("-" * 50)
        for method, tour in results.items():
            print(f"{method:<20} {tour.total:<15.2f} {tour.elapsed:<15.6f}")

    if results and (args.plot or args.save_plot):
        visualizer = TSPVisualizer()
        visualizer.plot_comparison(graph, list(results.values()), list(results.keys()),
                                   save_path=args.save_plot, show=args.plot)

    return status


if __name__ == "__main__":
    sys.exit(main())
