import pytest
from markgeom.tiling import clip_geometry, generate_tiles, stitch_line_sequence
from markgeom.geometry import Point, Line, Arc, Circle
from markgeom.poly import Path, Rectangle
from markgeom.wrapper import GeometryWrapper
from markgeom.geom import close, vclose, pi
## unit tests for markgeom tiling.py

CELL = Rectangle((0, 0), 4, 4)


class TestClip:

    def test_line_through(self):
        r = clip_geometry(Line((-10, 0), (10, 0)), CELL)
        assert len(r) == 1
        assert vclose(r[0].start, (-2, 0))
        assert vclose(r[0].end, (2, 0))

    def test_line_half_inside(self):
        l = Line((0, 0), (10, 0))
        l.stroke = (9, 9, 9, 255)
        r = clip_geometry(l, CELL)
        assert len(r) == 1
        assert vclose(r[0].start, (0, 0))
        assert vclose(r[0].end, (2, 0))
        assert r[0].stroke == (9, 9, 9, 255)

        r = clip_geometry(Line((10, 0), (0, 0)), CELL)
        assert vclose(r[0].start, (2, 0))
        assert vclose(r[0].end, (0, 0))

    def test_line_outside(self):
        assert clip_geometry(Line((-10, 5), (10, 5)), CELL) == []
        assert clip_geometry(Line((100, 100), (101, 101)), CELL) == []

    def test_line_grazing_corner(self):
        # touches the top-left corner from outside
        assert clip_geometry(Line((-4, 0), (0, 4)), CELL) == []
        assert clip_geometry(Line((0, 4), (-4, 0)), CELL) == []

    def test_contained_returned_as_is(self):
        l = Line((-1, 0), (1, 0))
        r = clip_geometry(l, CELL)
        assert r == [l]
        assert r[0] is l

    def test_points(self):
        p = Point(1, 1)
        assert clip_geometry(p, CELL)[0] is p
        assert clip_geometry(Point(2.5, 0), CELL) == []
        assert clip_geometry(Point(50, 50), CELL) == []

    def test_open_path(self):
        path = Path([(-10, 0), (0, 0), (10, 0)])
        r = clip_geometry(path, CELL)
        assert len(r) == 1
        assert isinstance(r[0], Path)
        assert close(r[0].perimeter, 4.0)
        assert vclose(r[0].start_point, (-2, 0))
        assert vclose(r[0].end_point, (2, 0))

    def test_circle_crossing(self):
        r = clip_geometry(Circle((5, 0), 4), CELL)
        assert len(r) == 1
        e = r[0].extents
        assert close(e.min_x, 1.0)
        assert e.max_x < 2.0

    def test_circle_around_cell(self):
        assert clip_geometry(Circle((0, 0), 10), CELL) == []

    def test_arc(self):
        r = clip_geometry(Arc((0, 0), 1, 0, pi), CELL)
        assert len(r) == 1
        assert isinstance(r[0], Arc)

    def test_wrapper(self):
        w = GeometryWrapper([Line((-10, 0), (10, 0)), Point(0, 0),
                             Point(50, 0)])
        assert len(clip_geometry(w, CELL)) == 2

    def test_unsupported(self):
        with pytest.raises(TypeError):
            clip_geometry('line', CELL)


class TestTiles:

    def test_single_point(self):
        p = Point(0, 0)
        tiles = generate_tiles([p], 10, 10)
        assert len(tiles) == 1
        tile, contents = next(iter(tiles.items()))
        assert vclose(tile.centre, (0, 0))
        assert close(tile.width, 10.0)
        assert len(contents) == 1
        assert contents[0] is not p
        assert vclose(contents[0], p)

    def test_line_split_over_tiles(self):
        tiles = generate_tiles([Line((0, 0), (25, 0))], 10, 10)
        assert len(tiles) == 3
        lengths = [g.length for contents in tiles.values() for g in contents]
        assert len(lengths) == 3
        assert close(sum(lengths), 25.0)

    def test_padding_grows_grid(self):
        tiles = generate_tiles([Point(0, 0)], 10, 10, padding=25.0)
        # 3 x 3 grid, only the middle tile holds anything
        assert len(tiles) == 1
        assert vclose(next(iter(tiles)).centre, (0, 0))

    def test_sources_untouched(self):
        l = Line((0, 0), (25, 0))
        generate_tiles([l], 10, 10)
        assert vclose(l.start, (0, 0))
        assert vclose(l.end, (25, 0))

    def test_bad_size(self):
        with pytest.raises(ValueError):
            generate_tiles([Point()], 2.0, 10.0)
        with pytest.raises(ValueError):
            generate_tiles([Point()], 10.0, 0.5)

    def test_empty(self):
        assert generate_tiles([], 10, 10) == {}


class TestStitch:

    def test_triangle(self):
        a = Line((0, 0), (10, 0))
        b = Line((10, 0), (5, 5))
        c = Line((5, 5), (0, 0))
        stray = Line((20, 20), (30, 20))
        b.fill = (1, 2, 3, 255)
        paths, unused = stitch_line_sequence([b, stray, c, a])
        assert len(paths) == 1
        assert paths[0].is_closed
        assert len(paths[0]) == 4
        assert close(paths[0].area, 25.0)
        assert paths[0].fill == (1, 2, 3, 255)
        assert unused == [stray]

    def test_two_chains(self):
        lines = [Line((0, 0), (1, 0)), Line((5, 5), (6, 5)),
                 Line((1, 0), (2, 0)), Line((6, 5), (7, 5))]
        paths, unused = stitch_line_sequence(lines)
        assert unused == []
        assert [len(p) for p in paths] == [3, 3]
        assert vclose(paths[1].start_point, (5, 5))

    def test_prepend(self):
        paths, unused = stitch_line_sequence([Line((1, 0), (2, 0)),
                                              Line((0, 0), (1, 0))])
        assert len(paths) == 1
        assert vclose(paths[0].start_point, (0, 0))
        assert vclose(paths[0].end_point, (2, 0))

    def test_empty(self):
        assert stitch_line_sequence([]) == ([], [])
