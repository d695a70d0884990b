import pytest

from .rows import DELIMITED_ROW_1, DELIMITED_ROW_2, DELIMITED_ROW_3, FIXED_ROW, FOOTER, HEADER


@pytest.fixture
def fixed_file():
    return "\n".join([HEADER, FIXED_ROW, FIXED_ROW.replace("6394", "6395", 1), FOOTER])


@pytest.fixture
def delimited_file():
    return "\r\n".join([HEADER, DELIMITED_ROW_1, DELIMITED_ROW_2, "", DELIMITED_ROW_3, FOOTER, ""])
