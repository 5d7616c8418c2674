# src/linkdist/cli.py
"""
Command-line entry point: load an edge list, compute the out-degree and
distance-2 histograms and save each one as a bar chart.
"""
import argparse
import logging
import sys
from typing import List, Optional

import matplotlib.pyplot as plt

from linkdist.analysis.graph_analysis import GraphAnalyzer, Histogram
from linkdist.graph.builder import load_graph
from linkdist.utils.config import Config
from linkdist.utils.logging import setup_logging
from linkdist.visualization.histogram_plot import HistogramPlotter

logger = logging.getLogger("linkdist")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkdist",
        description="Plot the out-degree and distance-2 neighbor distributions of a directed link graph."
    )
    parser.add_argument("input_path", help="Tab-separated edge list: source label, target label, ...")
    parser.add_argument("--config", "-c", default=None, help="YAML config file")
    parser.add_argument("--output-dir", default=None, help="Directory for the chart images")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("--no-progress", action="store_true", help="Hide progress bars")
    parser.add_argument("--dump-config", default=None, metavar="PATH",
                        help="Write the effective configuration to PATH as YAML before running")
    return parser


def save_chart(plotter: HistogramPlotter, data: Histogram, cfg: Config, plot_key: str, file_key: str) -> None:
    file_name = str(cfg.get(f"output.{file_key}"))
    fig = plotter.plot_histogram(
        data,
        save_path=file_name,
        title=str(cfg.get(f"plots.{plot_key}.title")),
        x_limit=cfg.get_int(f"plots.{plot_key}.x_limit"),
        y_limit=cfg.get_int(f"plots.{plot_key}.y_limit"),
        log_y=bool(cfg.get(f"plots.{plot_key}.log_y")),
        x_label="Out-degree" if plot_key == "degree" else "Distance-2 neighbors",
    )
    plt.close(fig)
    logger.info(f"Saved {file_name}")


def run(input_path: str, cfg: Config) -> None:
    """Run the whole pipeline; input and rendering errors propagate."""
    show_progress = bool(cfg.get("progress.enabled"))

    logger.info(f"Loading graph from {input_path}...")
    graph = load_graph(
        input_path,
        delimiter=cfg.get("input.delimiter"),
        has_header=bool(cfg.get("input.has_header")),
        encoding=str(cfg.get("input.encoding")),
        show_progress=show_progress,
    )
    logger.info(f"Loaded graph: {graph.number_of_nodes()} nodes, {graph.number_of_edges()} edges")

    analyzer = GraphAnalyzer(graph, show_progress=show_progress)
    stats = analyzer.get_basic_statistics()
    logger.info(
        "Out-degree: min=%d max=%d mean=%.2f median=%.1f, self-loops=%d",
        stats["out_degree_stats"]["min"], stats["out_degree_stats"]["max"],
        stats["out_degree_stats"]["mean"], stats["out_degree_stats"]["median"],
        stats["self_loops"]
    )

    top_n = cfg.get_int("analysis.top_n")
    if top_n > 0 and graph.number_of_nodes() > 0:
        top = analyzer.get_top_nodes("out_degree", top_n=top_n)
        logger.info("Top linking nodes: " + ", ".join(f"{r.label} ({r.score})" for r in top.itertuples()))

    plotter = HistogramPlotter(output_dir=str(cfg.get_path("output.dir", create=True)))

    logger.info("Computing degree distribution...")
    save_chart(plotter, analyzer.get_degree_distribution(), cfg, "degree", "degree_file")

    logger.info("Computing distance-2 neighbor distribution...")
    save_chart(plotter, analyzer.get_distance2_distribution(), cfg, "distance2", "distance2_file")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = Config(args.config)
        if args.output_dir:
            cfg.set("output.dir", args.output_dir)
        if args.log_file:
            cfg.set("logging.file", args.log_file)
        if args.no_progress:
            cfg.set("progress.enabled", False)

        log_file = cfg.get("logging.file")
        setup_logging(log_file=str(log_file) if log_file else None, level=cfg.get("logging.level", "INFO"))

        if args.dump_config:
            cfg.save(args.dump_config)

        run(args.input_path, cfg)
    except (OSError, ValueError, LookupError) as e:
        logger.error(f"Failed: {e}")
        # Keep the diagnostic visible when stdout is redirected
        print(f"linkdist: error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
