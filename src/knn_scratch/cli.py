"""Classify a query point against a CSV training set.

Example:
    $ knn-scratch data.csv 4.5 8.0 --k 3
"""

from collections.abc import Hashable
from typing import Annotated

import typer
from rich.markup import escape

from knn_scratch.config import ClassifierConfig
from knn_scratch.datasets.csv_dataset import load_points
from knn_scratch.errors import KNNError
from knn_scratch.point import Point
from knn_scratch.supervised.k_nearest_neighbors import majority_vote, nearest_neighbors
from knn_scratch.utils.logging import console, error_console, logger, setup_logger
from knn_scratch.utils.timer import capture_time

app = typer.Typer(pretty_exceptions_show_locals=False)


def run(config: ClassifierConfig) -> tuple[Point, Hashable]:
    """Load the training set and classify the configured query.

    Returns:
        The query point and its predicted label.
    """
    training = load_points(
        config.data_path, has_header=config.has_header, delimiter=config.delimiter
    )
    k = config.resolve_k(len(training))
    query = Point.query(config.query)

    with capture_time() as elapsed:
        neighbors = nearest_neighbors(training, query, k)
        label = majority_vote(neighbor.label for neighbor in neighbors)

    for neighbor in neighbors:
        logger.debug(
            f"neighbor #{neighbor.index} label={neighbor.label!r} "
            f"distance={neighbor.distance:.4f}"
        )
    logger.info(f"Classified with k={k} in {elapsed() * 1000:.2f} ms")
    return query, label


@app.command(context_settings={"ignore_unknown_options": True})
def main(
    data_path: Annotated[str, typer.Argument(help="CSV file with the training set")],
    query: Annotated[
        list[float], typer.Argument(help="Feature values of the query point")
    ],
    k: Annotated[
        int | None,
        typer.Option(help="Number of neighbors; defaults to ceil(sqrt(n))"),
    ] = None,
    header: Annotated[
        bool, typer.Option(help="Whether the first line of the file is a header")
    ] = True,
    delimiter: Annotated[str, typer.Option(help="The field separator")] = ",",
    verbose: Annotated[bool, typer.Option(help="Log neighbors and timing")] = False,
):
    """Predict the label of a query point with k-nearest neighbors."""
    setup_logger("DEBUG" if verbose else "WARNING")
    config = ClassifierConfig(
        data_path=data_path,
        query=tuple(query),
        k=k,
        has_header=header,
        delimiter=delimiter,
    )

    try:
        point, label = run(config)
    except KNNError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1) from e

    features = list(point.features)
    console.print(f"Predicted label for {features} is {escape(str(label))}")


if __name__ == "__main__":
    app()
