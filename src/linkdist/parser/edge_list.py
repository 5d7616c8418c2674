# src/linkdist/parser/edge_list.py
import csv
import logging
from pathlib import Path
from typing import Iterator, List, Tuple, Union

Record = Tuple[str, str]


class EdgeListError(ValueError):
    """Raised when an edge list file cannot be read as delimited text."""


class MalformedRecordError(EdgeListError):
    """Raised for a row that lacks a source or target column."""

    def __init__(self, path: str, line_number: int, fields: List[str]):
        self.path = path
        self.line_number = line_number
        self.fields = fields
        super().__init__(
            f"{path}:{line_number}: expected source and target columns, got {len(fields)} field(s): {fields!r}"
        )


class EdgeListReader:
    """
    Reads (source, target) label pairs from a delimiter-separated edge list.

    Column 0 holds the source label and column 1 the target label; any further
    columns are ignored. Quote characters are kept as part of the label. Blank
    lines are skipped. Iterating the reader opens the file afresh, so one reader
    can be consumed more than once.
    """

    def __init__(self, path: Union[str, Path], delimiter: str = "\t",
                 has_header: bool = False, encoding: str = "utf-8"):
        if not isinstance(delimiter, str) or len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")
        self.path = str(path)
        self.delimiter = delimiter
        self.has_header = has_header
        self.encoding = encoding
        self.logger = logging.getLogger(self.__class__.__name__)

    def __iter__(self) -> Iterator[Record]:
        return self.iter_records()

    def iter_records(self) -> Iterator[Record]:
        """Yield one (source, target) tuple per data row.

        Raises:
            FileNotFoundError: the file does not exist
            MalformedRecordError: a row has fewer than two columns
            EdgeListError: the file is not valid text in ``self.encoding``
        """
        self.logger.debug(f"Reading edge list from {self.path}")
        line_number = 0
        with open(self.path, 'r', encoding=self.encoding, newline='') as fh:
            reader = csv.reader(fh, delimiter=self.delimiter, quoting=csv.QUOTE_NONE)
            try:
                for row in reader:
                    line_number = reader.line_num
                    if not row:
                        continue
                    if self.has_header and line_number == 1:
                        continue
                    if len(row) < 2:
                        raise MalformedRecordError(self.path, line_number, row)
                    yield row[0], row[1]
            except UnicodeDecodeError as e:
                raise EdgeListError(
                    f"{self.path}: cannot decode as {self.encoding} after line {line_number}: {e}"
                ) from e
            except csv.Error as e:
                raise EdgeListError(f"{self.path}:{line_number}: {e}") from e
