import random

import pytest

from conftest import ImmediateLoader, ManualLoader, RecordingSurface
from fruit_slicer.game.board import BOMB_REASON, Board, sliced_sprite_paths
from fruit_slicer.game.errors import NotFound
from fruit_slicer.game.fruit import FlyingObject
from fruit_slicer.game.geometry import Point, Size, Velocity
from fruit_slicer.game.kinematics import calculate_gravity
from fruit_slicer.game.spawner import Spawner
from fruit_slicer.game.state import ObjectKind, SliceDirection

SIZE = Size(90, 90)


def make_board(calls, loader=None, bomb_every=(4, 8), width=800, height=600):
    spawner = Spawner(["images/apple.png", "images/pear.png"], "images/bomb.png",
                      bomb_every, random.Random(0))
    return Board(width, height, loader or ImmediateLoader(), spawner,
                 on_miss=calls.on_miss, on_hazard=calls.on_hazard, on_score=calls.on_score,
                 object_size=SIZE, step_ms=20, rng=random.Random(0))


def place(board, x, y, vx=0.0, vy=0.0, gravity=0.0, kind=ObjectKind.FRUIT, sliced=False,
          path="images/apple.png"):
    obj = FlyingObject(Point(x, y), Velocity(vx, vy), gravity, SIZE, kind=kind,
                       sprite_path=path, sliced=sliced)
    board.add(obj)
    board.insert_loaded()
    return obj


def test_sliced_sprite_paths():
    assert sliced_sprite_paths("images/apple.png", SliceDirection.VERTICAL) == (
        "images/apple_v1.png", "images/apple_v2.png")
    assert sliced_sprite_paths("images/apple.png", SliceDirection.HORIZONTAL) == (
        "images/apple_h1.png", "images/apple_h2.png")


# ----------------------------------------------------------------------
# spawning / deferred insertion
# ----------------------------------------------------------------------
def test_spawned_object_joins_after_its_sprite_loads(calls):
    loader = ManualLoader()
    board = make_board(calls, loader)
    g = calculate_gravity(600, 6000, 20)

    obj = board.spawn(ObjectKind.FRUIT, g, 6000)
    assert len(board) == 0
    assert board.pending == 1

    board.tick()
    assert len(board) == 0

    loader.resolve_all()
    assert board.insert_loaded() == 1
    assert board.objects == (obj,)
    assert obj.sprite == f"sprite:{obj.sprite_path}"
    assert obj.sprite_path in ("images/apple.png", "images/pear.png")


def test_load_completing_after_clear_is_discarded(calls):
    loader = ManualLoader()
    board = make_board(calls, loader)
    board.spawn(ObjectKind.FRUIT, calculate_gravity(600, 6000, 20), 6000)

    board.clear()
    loader.resolve_all()
    board.tick()

    assert len(board) == 0
    assert board.pending == 0


def test_failed_sprite_drops_the_object_without_a_miss(calls):
    board = make_board(calls, ImmediateLoader(broken={"images/apple.png", "images/pear.png"}))
    board.spawn(ObjectKind.FRUIT, calculate_gravity(600, 6000, 20), 6000)
    board.tick()

    assert len(board) == 0
    assert board.pending == 0
    assert calls.misses == 0


def test_spawn_wave_adds_bomb_when_counter_runs_out(calls):
    board = make_board(calls, bomb_every=(1, 2))
    g = calculate_gravity(600, 6000, 20)

    spawned = board.spawn_wave(2, g, 6000)
    assert [o.kind for o in spawned] == [ObjectKind.FRUIT, ObjectKind.FRUIT, ObjectKind.BOMB]
    assert spawned[-1].sprite_path == "images/bomb.png"


def test_spawn_wave_skips_invalid_spawns(calls, caplog):
    board = make_board(calls, width=50)
    spawned = board.spawn_wave(2, calculate_gravity(600, 6000, 20), 6000)

    assert spawned == []
    assert board.pending == 0
    assert "skipping fruit spawn" in caplog.text


# ----------------------------------------------------------------------
# tick
# ----------------------------------------------------------------------
def test_tick_on_empty_board_is_noop(calls):
    board = make_board(calls)
    board.tick()
    assert len(board) == 0
    assert calls.misses == 0


def test_tick_integrates_every_object(calls):
    board = make_board(calls)
    obj = place(board, 100, 300, vx=2, vy=-5, gravity=0.5)
    board.tick()

    assert obj.x == 102
    assert obj.velocity.vy == -4.5
    assert obj.y == 295.5


def test_whole_fruit_falling_through_floor_is_a_miss(calls):
    board = make_board(calls)
    place(board, 100, 595, vy=10)
    place(board, 300, 595, vy=10)
    board.tick()

    assert len(board) == 0
    assert calls.misses == 2


def test_bombs_and_sliced_pieces_falling_are_not_misses(calls):
    board = make_board(calls)
    place(board, 100, 595, vy=10, kind=ObjectKind.BOMB)
    place(board, 300, 595, vy=10, sliced=True)
    board.tick()

    assert len(board) == 0
    assert calls.misses == 0


def test_objects_leaving_sideways_are_removed_without_miss(calls):
    board = make_board(calls)
    place(board, 799, 300, vx=5)
    place(board, -85, 300, vx=-10)
    kept = place(board, -80, 300, vx=-10)  # ends exactly at -width
    board.tick()

    assert board.objects == (kept,)
    assert calls.misses == 0


# ----------------------------------------------------------------------
# hit test / slice
# ----------------------------------------------------------------------
def test_hit_test_on_empty_board(calls):
    board = make_board(calls)
    assert board.hit_test(Point(10, 10), Point(0, 0)) == []


def test_boundary_counts_as_inside(calls):
    board = make_board(calls)
    place(board, 100, 100)
    assert len(board.hit_test(Point(190, 190), Point(190, 100))) == 1


def test_pointer_outside_box_misses(calls):
    board = make_board(calls)
    obj = place(board, 100, 100)
    assert board.hit_test(Point(190.5, 150), Point(250, 150)) == []
    assert board.objects == (obj,)
    assert calls.scores == 0


def test_horizontal_slice_splits_into_full_width_halves(calls):
    board = make_board(calls)
    fruit = place(board, 100, 100, vx=3, vy=-4, gravity=0.05)

    hits = board.hit_test(Point(150, 150), Point(100, 145))
    assert hits == [fruit]
    assert fruit.sliced
    assert calls.scores == 1
    assert fruit not in board

    board.insert_loaded()
    one, two = board.objects
    assert one.size == Size(90, 45) and two.size == Size(90, 45)
    assert (one.x, one.y) == (100, 100)
    assert (two.x, two.y) == (100, 145)
    assert one.sprite_path == "images/apple_h1.png"
    assert two.sprite_path == "images/apple_h2.png"


def test_vertical_slice_splits_into_full_height_halves(calls):
    board = make_board(calls)
    fruit = place(board, 100, 100, vx=-3)

    halves = board.slice(fruit, SliceDirection.VERTICAL)
    assert [h.size for h in halves] == [Size(45, 90), Size(45, 90)]
    assert (halves[1].x, halves[1].y) == (145, 100)
    assert [h.sprite_path for h in halves] == ["images/apple_v1.png", "images/apple_v2.png"]


@pytest.mark.parametrize("direction", list(SliceDirection))
@pytest.mark.parametrize("vx", [3.5, -2.0])
def test_halves_conserve_area_and_fly_apart(calls, direction, vx):
    board = make_board(calls)
    fruit = place(board, 200, 200, vx=vx, vy=-6, gravity=0.05)

    halves = board.slice(fruit, direction)
    assert len(halves) == 2
    assert sum(h.size.area for h in halves) == fruit.size.area
    assert halves[0].velocity.vx == -abs(vx)
    assert halves[1].velocity.vx == abs(vx)
    assert all(h.velocity.vy == 0 for h in halves)
    assert all(h.sliced and h.gravity == 0.05 for h in halves)


def test_halves_keep_falling_but_cannot_be_sliced_again(calls):
    board = make_board(calls)
    place(board, 100, 100, vx=1)
    board.hit_test(Point(150, 150), Point(150, 100))
    board.insert_loaded()
    assert len(board) == 2

    assert board.hit_test(Point(150, 150), Point(150, 100)) == []
    assert calls.scores == 1

    board.tick()
    assert all(h.velocity.vy > 0 or h.gravity == 0 for h in board.objects)


def test_bomb_slice_triggers_hazard_once_and_spawns_nothing(calls):
    board = make_board(calls)
    bomb = place(board, 100, 100, kind=ObjectKind.BOMB, path="images/bomb.png")

    assert board.slice(bomb, SliceDirection.VERTICAL) == []
    assert calls.hazards == [BOMB_REASON]
    assert calls.scores == 0
    assert board.pending == 0

    # already sliced: no second callback
    assert board.slice(bomb, SliceDirection.VERTICAL) == []
    assert calls.hazards == [BOMB_REASON]


def test_every_object_under_pointer_is_sliced_in_order(calls):
    board = make_board(calls)
    first = place(board, 100, 100)
    second = place(board, 120, 120, path="images/pear.png")
    place(board, 500, 500)

    hits = board.hit_test(Point(150, 150), Point(100, 150))
    assert hits == [first, second]
    assert calls.scores == 2
    assert board.pending == 4


def test_slicing_object_not_on_board_is_rejected(calls):
    board = make_board(calls)
    kept = place(board, 100, 100)
    stranger = FlyingObject(Point(0, 0), Velocity(0, 0), 0.0, SIZE, sprite_path="images/apple.png")

    with pytest.raises(NotFound):
        board.slice(stranger, SliceDirection.VERTICAL)
    assert board.objects == (kept,)
    assert calls.scores == 0
    assert not stranger.sliced


def test_draw_sends_loaded_objects_to_surface(calls):
    board = make_board(calls)
    place(board, 10, 20)
    surface = RecordingSurface()
    board.draw(surface)
    assert surface.images == [("sprite:images/apple.png", 10.0, 20.0, 90, 90)]


def test_broken_decode_drops_only_that_object(calls, caplog):
    loader = ManualLoader()
    board = make_board(calls, loader)
    good = FlyingObject(Point(100, 100), Velocity(0, 0), 0.0, SIZE, sprite_path="images/apple.png")
    bad = FlyingObject(Point(300, 100), Velocity(0, 0), 0.0, SIZE, sprite_path="images/pear.png")
    board.add(good)
    board.add(bad)

    loader.futures[0][1].set_result("sprite:images/apple.png")
    loader.futures[1][1].set_exception(ValueError("unsupported image shape"))
    for _ in range(3):
        board.tick()

    assert board.objects == (good,)
    assert board.pending == 0
    assert calls.misses == 0
    assert "sprite decode failed" in caplog.text


def test_bomb_is_the_only_hazard():
    fruit = FlyingObject(Point(0, 0), Velocity(0, 0), 0.0, SIZE)
    bomb = FlyingObject(Point(0, 0), Velocity(0, 0), 0.0, SIZE, kind=ObjectKind.BOMB)
    assert not fruit.is_hazard()
    assert bomb.is_hazard()
