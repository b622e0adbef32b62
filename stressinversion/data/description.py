"""Parsing of semicolon separated data lines.

Every line holds 17 columns::

    0 dataNumber        1 dataType          2 strike            3 dip
    4 dipDirection      5 rake              6 strikeDirection   7 striationTrend
    8 typeOfMovement    9 lineTrend        10 linePlunge       11 deformationPhase
   12 relatedWeight    13 minFrictionAngle 14 maxFrictionAngle 15 minAngleS1n
   16 maxAngleS1n

Each data type reads the columns it needs through :class:`DataArguments`,
which records every problem found so that all the errors of a datum, over all
its linked lines, are reported at once.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional, Union

from ..fault_helper import Direction, TypeOfMovement
from ..logging_config import get_logger
from ..types import ValidationError
from .data import Data, DataStatus

if TYPE_CHECKING:
    from .factory import DataFactory

logger = get_logger(__name__)

NB_COLUMNS = 17

COLUMN_NAMES = [
    "dataNumber",
    "dataType",
    "strike",
    "dip",
    "dipDirection",
    "rake",
    "strikeDirection",
    "striationTrend",
    "typeOfMovement",
    "lineTrend",
    "linePlunge",
    "deformationPhase",
    "relatedWeight",
    "minFrictionAngle",
    "maxFrictionAngle",
    "minAngleS1n",
    "maxAngleS1n",
]

# (low, high, high bound excluded) for numeric columns, None when unbounded
COLUMN_RANGES = {
    2: (0.0, 360.0, True),
    3: (0.0, 90.0, False),
    5: (0.0, 90.0, False),
    7: (0.0, 360.0, True),
    9: (0.0, 360.0, True),
    10: (0.0, 90.0, False),
    11: (1.0, None, False),
    12: (0.0, None, False),
    13: (0.0, 90.0, True),
    14: (0.0, 90.0, True),
    15: (0.0, 90.0, False),
    16: (0.0, 90.0, False),
}


def _format_range(low: Optional[float], high: Optional[float], high_open: bool) -> str:
    if high is None:
        return f">= {low:g}"
    return f"[{low:g}, {high:g}{')' if high_open else ']'}"


class DataArguments:
    """Tokens of one data line with typed, range checked accessors.

    Args:
        toks: The 17 column tokens
        line_number: Line number in the source, for messages
        status: Status receiving the errors, shared by linked lines
    """

    def __init__(
        self,
        toks: list[str],
        line_number: int = 0,
        status: Optional[DataStatus] = None,
    ):
        self.toks = [tok.strip() for tok in toks]
        self.line_number = line_number
        self.status = status if status is not None else DataStatus()

    @classmethod
    def from_line(
        cls, line: str, line_number: int = 0, status: Optional[DataStatus] = None
    ) -> "DataArguments":
        """Split a data line.

        Raises:
            ValidationError: If the number of columns or the data number is wrong
        """
        toks = line.rstrip("\n").split(";")
        if len(toks) != NB_COLUMNS:
            raise ValidationError(
                f"Line {line_number}: bad number of columns, expected {NB_COLUMNS} and got {len(toks)}"
            )
        arguments = cls(toks, line_number, status)
        try:
            number = int(arguments.toks[0])
        except ValueError:
            number = 0
        if number <= 0:
            raise ValidationError(
                f"Line {line_number}: wrong data number '{arguments.toks[0]}', expected a positive integer"
            )
        return arguments

    @property
    def data_number(self) -> int:
        return int(self.toks[0])

    @property
    def data_type(self) -> str:
        return self.toks[1]

    def is_defined(self, index: int) -> bool:
        return len(self.toks[index]) != 0

    def error(self, index: int, message: str) -> None:
        self.status.add_error(
            f"Data number {self.toks[0]}, column {index} ({COLUMN_NAMES[index]}): {message}"
        )

    def get_float(
        self,
        index: int,
        mandatory: bool = True,
        low: Optional[float] = None,
        high: Optional[float] = None,
        high_open: bool = False,
    ) -> Optional[float]:
        """Read a number, checking the range of the column.

        ``low`` and ``high`` override the default range of the column, for
        data types giving a column another meaning.

        Returns:
            The value, or None if it is missing or invalid
        """
        if not self.is_defined(index):
            if mandatory:
                self.error(index, "mandatory parameter is missing")
            return None
        try:
            value = float(self.toks[index].replace(",", "."))
        except ValueError:
            self.error(index, f"expected a number, got '{self.toks[index]}'")
            return None

        if low is None and high is None:
            low, high, high_open = COLUMN_RANGES.get(index, (None, None, False))
        too_low = low is not None and value < low
        too_high = high is not None and (value >= high if high_open else value > high)
        if too_low or too_high:
            self.error(
                index,
                f"parameter is out of range, got {value:g} and should be {_format_range(low, high, high_open)}",
            )
            return None
        return value

    def get_direction(self, index: int) -> Optional[Direction]:
        """Read a direction, UND when the column is empty."""
        if not self.is_defined(index):
            return Direction.UND
        try:
            return Direction.from_string(self.toks[index])
        except ValidationError as e:
            self.error(index, str(e))
            return None

    def get_movement(self, index: int = 8) -> Optional[TypeOfMovement]:
        """Read a type of movement, UND when the column is empty."""
        if not self.is_defined(index):
            return TypeOfMovement.UND
        try:
            return TypeOfMovement.from_string(self.toks[index])
        except ValidationError as e:
            self.error(index, str(e))
            return None


class DataDescription:
    """Build data from lines, using the data types bound in a factory.

    Args:
        factory: Registry mapping data type names to data classes
    """

    def __init__(self, factory: "DataFactory"):
        self.factory = factory

    def read_file(self, path: Union[str, Path]) -> list[Data]:
        with open(path, "r", encoding="utf-8") as f:
            return self.parse(f.readlines())

    def parse(self, lines: Iterable[str]) -> list[Data]:
        """Initialize one datum per data line, or per group of linked lines.

        Blank lines and lines starting with '#' are skipped.

        Raises:
            ValidationError: On the first datum holding invalid parameters,
                with the messages of all its linked lines
        """
        entries = [
            (number, line)
            for number, line in enumerate(lines, start=1)
            if line.strip() and not line.lstrip().startswith("#")
        ]

        data: list[Data] = []
        index = 0
        while index < len(entries):
            line_number, line = entries[index]
            status = DataStatus()
            first = DataArguments.from_line(line, line_number, status)
            datum = self._create(first)

            arguments = [first]
            for k in range(1, datum.nb_linked_data):
                if index + k >= len(entries):
                    raise ValidationError(
                        f"Data number {first.data_number}: {first.data_type} expects "
                        f"{datum.nb_linked_data} linked lines"
                    )
                linked_number, linked_line = entries[index + k]
                linked = DataArguments.from_line(linked_line, linked_number, status)
                if self.factory.class_of(linked.data_type) is not type(datum):
                    raise ValidationError(
                        f"Data number {linked.data_number}: expected a line linked to "
                        f"{first.data_type}, got {linked.data_type}"
                    )
                arguments.append(linked)

            result = datum.initialize(arguments)
            if not result.status:
                raise ValidationError(
                    f"Invalid parameters for {self.factory.name(datum)} (line {line_number}):\n"
                    + "\n".join(result.messages),
                    result.messages,
                )
            logger.debug(
                "Initialized %s from line %d", self.factory.name(datum), line_number
            )
            data.append(datum)
            index += datum.nb_linked_data

        logger.info("Read %d data", len(data))
        return data

    def _create(self, arguments: DataArguments) -> Data:
        if not self.factory.exists(arguments.data_type):
            raise ValidationError(
                f"Data type named '{arguments.data_type}' is unknown for data number "
                f"{arguments.data_number}, expected one of {self.factory.names()}"
            )
        return self.factory.create(arguments.data_type)
