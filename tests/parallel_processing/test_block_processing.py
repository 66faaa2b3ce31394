import threading

import numpy as np
import pytest

import GreyMorph.ParallelProcessing.BlockProcessing as bp
from GreyMorph.Geometry.Region import Region
from GreyMorph.IO.ImageBuffer import ImageBuffer
from GreyMorph.Utils.exceptions import GeometryError


class RecordingFilter(object):
    """Filter writing the number of the call into each processed region."""

    def __init__(self, fail=False):
        self.regions = []
        self.fail = fail
        self.lock = threading.Lock()

    def process_region(self, region, sink, verbose=False):
        with self.lock:
            self.regions.append(region)
            count = len(self.regions)
        if self.fail and region.index[0] > 0:
            raise GeometryError("region %r failed" % (region,))
        sink.write(region, np.full(region.size, count))


@pytest.mark.parametrize("size, processes, size_max", [
    (100, 4, 30), (7, 3, 2), (1, 8, 1), (64, 1, None), (33, 5, 4),
])
def test_block_sizes_cover_axis(size, processes, size_max):
    n_blocks, ranges = bp.block_sizes(size, processes=processes, size_max=size_max)
    assert n_blocks == len(ranges)
    assert ranges[0][0] == 0 and ranges[-1][1] == size
    for (lo0, hi0), (lo1, hi1) in zip(ranges[:-1], ranges[1:]):
        assert hi0 == lo1
        assert lo0 < hi0
    assert ranges[-1][0] < ranges[-1][1]


def test_block_sizes_example():
    assert bp.block_sizes(100, processes=4, size_max=30) == (4, [(0, 25), (25, 50), (50, 75), (75, 100)])


def test_block_sizes_without_size_max_does_not_split():
    assert bp.block_sizes(50, processes=4) == (1, [(0, 50)])


def test_block_sizes_min_larger_than_max():
    with pytest.raises(ValueError):
        bp.block_sizes(100, processes=2, size_max=5, size_min=10)


@pytest.mark.parametrize("axes, order, expected", [
    (None, 'C', [0]),
    (None, 'F', [2]),
    (all, 'C', [0, 1, 2]),
    (1, 'C', [1]),
    ([2, 0], 'C', [2, 0]),
])
def test_block_axes(axes, order, expected):
    assert bp.block_axes(3, axes=axes, order=order) == expected


def test_block_axes_invalid():
    with pytest.raises(ValueError):
        bp.block_axes(2, axes=[2])


@pytest.mark.parametrize("axes", [None, [1], all])
def test_split_into_regions_partitions_region(axes):
    region = Region(index=(3, -2, 5), size=(10, 13, 4))
    regions = bp.split_into_regions(region, processes=3, axes=axes, size_max=4)
    assert sum(r.number_of_pixels for r in regions) == region.number_of_pixels
    assert all(region.is_inside(r) for r in regions)
    covered = set()
    for r in regions:
        pixels = set(r.indices())
        assert not covered & pixels
        covered |= pixels
    assert covered == set(region.indices())


def test_split_into_regions_example():
    regions = bp.split_into_regions(Region.from_shape((50, 100)), processes=4, axes=[1], size_max=30)
    assert len(regions) == 4
    assert regions[1] == Region(index=(0, 25), size=(50, 25))


@pytest.mark.parametrize("processes", ['serial', 1, 4])
def test_process_visits_every_region_once(processes):
    sink = ImageBuffer(np.zeros((12, 9), dtype=int))
    recorder = RecordingFilter()
    bp.process(recorder, sink, processes=processes, axes=all, size_max=3)
    expected = bp.split_into_regions(sink.buffered_region, processes=processes, axes=all, size_max=3)
    assert sorted(recorder.regions, key=repr) == sorted(expected, key=repr)
    assert np.all(sink.array > 0)


def test_process_sub_region_only():
    sink = ImageBuffer(np.zeros((10, 10), dtype=int))
    region = Region(index=(2, 3), size=(4, 5))
    bp.process(RecordingFilter(), sink, region=region, processes=2, axes=[0], size_max=2)
    inside = np.zeros((10, 10), dtype=bool)
    inside[region.slicing()] = True
    assert np.all(sink.array[inside] > 0)
    assert np.all(sink.array[~inside] == 0)


@pytest.mark.parametrize("processes", ['serial', 3])
def test_process_propagates_worker_errors(processes):
    sink = ImageBuffer(np.zeros((12, 4), dtype=int))
    recorder = RecordingFilter(fail=True)
    with pytest.raises(GeometryError) as error:
        bp.process(recorder, sink, processes=processes, axes=[0], size_max=3)
    assert "failed" in str(error.value)
    assert 'Traceback' in str(error.value)
    assert 'In worker call process_region(Region(' in str(error.value)


def test_process_verbose(capsys):
    sink = ImageBuffer(np.zeros((4, 4), dtype=int))
    bp.process(RecordingFilter(), sink, processes='serial', axes=[0], size_max=2, verbose=True)
    out = capsys.readouterr().out
    assert 'Processing 2 regions' in out
    assert 'Final blocks : 2' in out
