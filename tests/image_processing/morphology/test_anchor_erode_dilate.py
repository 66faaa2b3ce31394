import numpy as np
import pytest
import scipy.ndimage as ndi

import GreyMorph.ImageProcessing.Filter.StructureElement as se
import GreyMorph.ImageProcessing.Morphology.AnchorErodeDilate as aed
from GreyMorph.Geometry.Region import Region
from GreyMorph.IO.ImageBuffer import ImageBuffer
from GreyMorph.Utils.exceptions import ConfigurationError, GeometryError


class RecordingImageBuffer(ImageBuffer):
    """Image buffer recording the regions read and written."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.read_regions = []
        self.written_regions = []

    def view(self, region):
        self.read_regions.append(region)
        return super().view(region)

    def write(self, region, values):
        self.written_regions.append(region)
        super().write(region, values)


@pytest.fixture
def image():
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(23, 31)).astype(np.uint8)


def test_concrete_sequence():
    source = np.array([5, 1, 4, 2, 3])
    erode = aed.AnchorErode(se.box(1, ndim=1))
    erode.set_input(source)
    assert erode.update(processes='serial').array.tolist() == [1, 1, 1, 2, 2]

    dilate = aed.AnchorDilate(se.box(1, ndim=1))
    dilate.set_input(source)
    assert dilate.update(processes='serial').array.tolist() == [5, 5, 4, 4, 3]


@pytest.mark.parametrize("function, scipy_function", [
    ('min', ndi.grey_erosion),
    ('max', ndi.grey_dilation),
])
@pytest.mark.parametrize("radius", [(1, 1), (2, 3), (0, 4), (5, 0)])
def test_box_matches_full_element(image, function, scipy_function, radius):
    selem = se.box(radius)
    anchor = aed.AnchorErodeDilate(selem, function=function)
    anchor.set_input(image)
    result = anchor.update(processes='serial').array

    cval = 255 if function == 'min' else 0
    expected = scipy_function(image, footprint=selem.array, mode='constant', cval=cval)
    assert np.array_equal(result, expected)


@pytest.mark.parametrize("function, scipy_function", [
    ('min', ndi.grey_erosion),
    ('max', ndi.grey_dilation),
])
def test_octagon_matches_full_element_in_interior(image, function, scipy_function):
    selem = se.polygon(3, n_lines=4)
    anchor = aed.AnchorErodeDilate(selem, function=function)
    anchor.set_input(image)
    result = anchor.update(processes='serial').array

    expected = scipy_function(image, footprint=selem.array, mode='constant',
                              cval=255 if function == 'min' else 0)
    r = 3
    assert np.array_equal(result[r:-r, r:-r], expected[r:-r, r:-r])


def test_3d_box_matches_full_element():
    rng = np.random.default_rng(3)
    image = rng.random((9, 11, 7))
    selem = se.box((1, 2, 1))
    anchor = aed.AnchorErode(selem)
    anchor.set_input(image)
    result = anchor.update(processes='serial').array
    expected = ndi.grey_erosion(image, footprint=selem.array, mode='constant', cval=np.inf)
    assert np.array_equal(result, expected)


@pytest.mark.parametrize("selem", [
    se.box((2, 2)), se.box((0, 3)), se.polygon(4, n_lines=4), se.polygon(7, n_lines=8),
    se.from_lines([(4, 2), (0, 3)]),
])
@pytest.mark.parametrize("function", ['min', 'max'])
def test_constant_image_is_unchanged(selem, function):
    image = np.full((17, 19), 42, dtype=np.int32)
    anchor = aed.AnchorErodeDilate(selem, function=function)
    anchor.set_input(image)
    result = anchor.update(processes=3, size_max=5, axes=all).array
    assert np.all(result == 42)


@pytest.mark.parametrize("selem", [
    se.box((2, 1)), se.polygon(3, n_lines=4), se.from_lines([(3, 3), (3, -3)]),
    se.polygon(7, n_lines=8), se.from_lines([(4, 2)]), se.from_lines([(1, -3), (5, 2)]),
])
@pytest.mark.parametrize("function", ['min', 'max'])
def test_region_splitting_does_not_change_result(image, selem, function):
    anchor = aed.AnchorErodeDilate(selem, function=function)
    anchor.set_input(image)
    whole = anchor.update(processes='serial').array
    split = anchor.update(processes=4, size_max=6, axes=all).array
    serial_split = anchor.update(processes='serial', size_max=4, axes=[1]).array
    assert np.array_equal(whole, split)
    assert np.array_equal(whole, serial_split)


@pytest.mark.parametrize("selem", [se.polygon(7, n_lines=8), se.from_lines([(4, 2)]), se.from_lines([(1, -3), (5, 2)])])
def test_oblique_lines_stay_inside_structure_element(image, selem):
    anchor = aed.AnchorErode(selem)
    anchor.set_input(image)
    result = anchor.update(processes=3, size_max=5, axes=all).array
    expected = ndi.grey_erosion(image, footprint=selem.array, mode='constant', cval=255)
    assert np.all(result >= expected)
    assert np.all(result <= image)


def test_region_safety(image):
    selem = se.box((2, 3))
    source = RecordingImageBuffer(image)
    sink = RecordingImageBuffer(np.zeros_like(image))
    anchor = aed.AnchorErode(selem)
    anchor.set_input(source)

    full = source.largest_possible_region
    regions = [Region(index=(0, 0), size=(5, 6)), Region(index=(10, 12), size=(4, 4)),
               Region(index=(18, 25), size=(5, 6))]
    for region in regions:
        source.read_regions.clear()
        sink.written_regions.clear()
        anchor.process_region(region, sink)
        allowed = region.pad(selem.radius).crop(full)
        assert source.read_regions == [allowed]
        assert sink.written_regions == [region]


def test_process_region_writes_only_region(image):
    sink = np.full(image.shape, 7, dtype=np.uint8)
    anchor = aed.AnchorDilate(se.box((1, 1)))
    anchor.set_input(image)
    region = Region(index=(4, 5), size=(6, 3))
    anchor.process_region(region, sink)

    expected = ndi.grey_dilation(image, footprint=np.ones((3, 3)), mode='constant', cval=0)
    inside = np.zeros(image.shape, dtype=bool)
    inside[region.slicing()] = True
    assert np.array_equal(sink[inside], expected[inside])
    assert np.all(sink[~inside] == 7)


def test_processor_states(image):
    anchor = aed.AnchorErode(se.box((1, 1)))
    anchor.set_input(image)
    processor = anchor.process_region(Region(index=(2, 2), size=(4, 4)), np.zeros_like(image))
    assert processor.state == aed.DONE
    assert processor.padded_region == Region(index=(1, 1), size=(6, 6))
    assert processor.buffer_length == 6 + 6 + 2
    assert processor.line_index == 1

    again = anchor.process_region(Region(index=(0, 0), size=(2, 2)), np.zeros_like(image))
    assert again.state == aed.DONE
    assert again is not processor


def test_non_decomposable_kernel_raises_before_any_access(image):
    source = RecordingImageBuffer(image)
    sink = RecordingImageBuffer(np.full(image.shape, 3, dtype=np.uint8))
    anchor = aed.AnchorErode(se.ball(2, ndim=2))
    anchor.set_input(source)

    processor = aed.AnchorRegionProcessor(anchor, Region(index=(0, 0), size=(5, 5)), sink)
    with pytest.raises(ConfigurationError):
        processor.run()
    assert processor.state == aed.BOUNDARY_CHECK
    assert processor.accumulator is None and processor.in_buffer is None
    assert source.read_regions == [] and sink.written_regions == []

    with pytest.raises(ConfigurationError):
        anchor.update(sink=sink, processes=2, size_max=5)
    assert np.all(sink.array == 3)
    assert source.read_regions == [] and sink.written_regions == []


def test_boundary_value(image):
    anchor = aed.AnchorErode(se.box((1, 1)))
    anchor.set_input(image)
    assert anchor.boundary is None
    assert anchor.boundary_value() == 255

    anchor.boundary = 0
    assert anchor.boundary == 0
    result = anchor.update(processes='serial').array
    assert np.all(result[0, :] == 0) and np.all(result[-1, :] == 0)
    assert np.all(result[:, 0] == 0) and np.all(result[:, -1] == 0)

    anchor.boundary = None
    default = anchor.update(processes='serial').array
    assert np.array_equal(result[1:-1, 1:-1], default[1:-1, 1:-1])


def test_output_region_outside_input_raises(image):
    anchor = aed.AnchorErode(se.box((1, 1)))
    anchor.set_input(image)
    with pytest.raises(GeometryError):
        anchor.process_region(Region(index=(20, 0), size=(5, 5)), np.zeros((30, 30), dtype=np.uint8))


def test_requested_region_limits_reads(image):
    source = RecordingImageBuffer(image, largest_possible_region=None)
    source.requested_region = Region(index=(5, 5), size=(10, 10))
    anchor = aed.AnchorDilate(se.box((2, 2)))
    anchor.set_input(source)
    sink = anchor.update(processes='serial')

    assert sink.buffered_region == Region(index=(5, 5), size=(10, 10))
    assert all(source.requested_region.is_inside(r) for r in source.read_regions)
    expected = ndi.grey_dilation(image[5:15, 5:15], footprint=np.ones((5, 5)), mode='constant', cval=0)
    assert np.array_equal(sink.array, expected)


def test_image_buffer_with_origin():
    rng = np.random.default_rng(0)
    data = rng.random((12, 10))
    source = ImageBuffer(data, index=(100, -20))
    anchor = aed.AnchorErode(se.box((1, 2)))
    anchor.set_input(source)
    sink = anchor.update(processes=2, size_max=4)
    assert sink.buffered_region == source.buffered_region
    expected = ndi.grey_erosion(data, footprint=np.ones((3, 5)), mode='constant', cval=np.inf)
    assert np.array_equal(sink.array, expected)


def test_too_small_buffer_margin_raises(image):
    anchor = aed.AnchorErode(se.box((1, 1)), buffer_margin=-40)
    anchor.set_input(image)
    with pytest.raises(GeometryError):
        anchor.update(processes='serial')


def test_dimension_mismatch_raises(image):
    anchor = aed.AnchorErode(se.box(1, ndim=3))
    with pytest.raises(GeometryError):
        anchor.set_input(image)
