from cavernforge.world import World, WorldConfig

SMALL = WorldConfig(width=60, height=40, min_caverns=6, max_caverns=8)


def test_same_seed_same_world():
    a = World(seed=12345, config=SMALL)
    b = World(seed=12345, config=SMALL)
    assert a.grid == b.grid
    assert a.content_hash() == b.content_hash()
    assert a.render() == b.render()
    assert [c.center for c in a.caverns] == [c.center for c in b.caverns]


def test_different_seeds_differ():
    hashes = {World(seed=s, config=SMALL).content_hash() for s in (1, 2, 3)}
    assert len(hashes) == 3


def test_zero_is_a_real_seed():
    world = World(seed=0, config=SMALL)
    assert world.seed == 0
    assert world.content_hash() == World(seed=0, config=SMALL).content_hash()


def test_missing_seed_is_chosen_and_recorded():
    world = World(config=SMALL)
    assert isinstance(world.seed, int)
    assert World(seed=world.seed, config=SMALL).content_hash() == world.content_hash()


def test_metrics_do_not_change_the_world():
    on = World(seed=77, config=SMALL, enable_metrics=True)
    off = World(seed=77, config=SMALL, enable_metrics=False)
    assert on.content_hash() == off.content_hash()
    assert off.metrics == {}
