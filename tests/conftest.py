import io

import pytest

from recnorm.normalize import Normalizer
from recnorm.pipeline import normalize_stream

HEADER = "Timestamp,Address,Zip,FullName,FooDuration,BarDuration,TotalDuration,Notes"
VALID_ROW = (
    '4/1/11 11:00:00 AM,"123 4th St, Anywhere, AA",94121,Monkey Alberto,'
    "1:23:32.123,1:32:33.123,zzsasdfa,I am the very model of a modern major general"
)
VALID_OUT = (
    '2011-04-01T14:00:00-04:00,"123 4th St, Anywhere, AA",94121,MONKEY ALBERTO,'
    "5012.123000,5553.123000,10565.246000,I am the very model of a modern major general"
)


@pytest.fixture(scope="session")
def normalizer():
    return Normalizer.from_zone_names()


@pytest.fixture
def run_csv(normalizer):
    """Run the pipeline over `text`, return (output text, report)."""
    def _run(text):
        sink = io.StringIO(newline="")
        report = normalize_stream(io.StringIO(text, newline=""), sink, normalizer)
        return sink.getvalue(), report
    return _run
