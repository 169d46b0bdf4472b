from esper import World

from tilematch.components.barrier import Barrier
from tilematch.components.duration import Duration
from tilematch.events.bus import EVENT_ANIMATION_COMPLETE, EVENT_ANIMATION_START, EVENT_TICK, EventBus


class AnimationSystem:
    """Drives logical barriers; each barrier is its own entity.

    A barrier started by ``animation_start`` completes once enough tick time
    has passed, then ``animation_complete`` is emitted with the same kind and
    items. Barriers started while a completion is being handled wait for the
    next tick.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_ANIMATION_START, self.on_animation_start)

    def on_animation_start(self, sender, **kwargs):
        kind = kwargs.get('kind')
        if not kind:
            return
        items = list(kwargs.get('items', []))
        duration = float(kwargs.get('duration', 0.0))
        self.world.create_entity(Barrier(kind=kind, items=items), Duration(duration))

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        finished = []
        for ent, (barrier, duration) in list(self.world.get_components(Barrier, Duration)):
            barrier.elapsed += dt
            if barrier.elapsed >= duration.value:
                finished.append((ent, barrier))
        for ent, barrier in finished:
            self.world.delete_entity(ent, immediate=True)
            self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind=barrier.kind, items=barrier.items)

    def active(self) -> bool:
        return bool(self.world.get_component(Barrier))
