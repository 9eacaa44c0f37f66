"""Test the per-service event adapter."""

from rest_services.services.events import ServiceEvents


class TestServiceEvents:
    def test_emit_namespaces_event(self, bus):
        received = []
        bus.on("font.test", received.append)

        ServiceEvents("font", bus).emit("test", {})

        assert received == [{}]

    def test_on_registers_persistent_handler(self, bus):
        received = []
        ServiceEvents("font", bus).on("test", received.append)

        bus.emit("font.test", {})
        bus.emit("font.test", {})

        assert len(received) == 2

    def test_once_registers_single_use_handler(self, bus):
        received = []
        ServiceEvents("font", bus).once("test", received.append)

        bus.emit("font.test", {})
        bus.emit("font.test", {})

        assert len(received) == 1

    def test_off_removes_handler(self, bus):
        received = []
        bus.on("font.test", received.append)

        ServiceEvents("font", bus).off("test", received.append)
        bus.emit("font.test", {})

        assert received == []

    def test_subscriptions_track_registrations(self, bus):
        subscriptions = ServiceEvents("font", bus).subscriptions

        def fn(payload):
            pass

        bus.on("font.test", fn)
        assert len(subscriptions()) == 1

        bus.on("font.test-2", fn)
        assert len(subscriptions()) == 2

        bus.off("font.test", fn)
        assert len(subscriptions()) == 1

        bus.off("font.test-2", fn)
        assert len(subscriptions()) == 0

    def test_subscriptions_exclude_other_services(self, bus):
        def fn(payload):
            pass

        bus.on("font.index.success", fn)
        bus.on("fonts.index.success", fn)
        bus.on("template.index.success", fn)

        subs = ServiceEvents("font", bus).subscriptions()
        assert [s.type for s in subs] == ["font.index.success"]

    def test_services_share_bus_without_crosstalk(self, bus):
        font, template = [], []
        ServiceEvents("font", bus).on("saved", font.append)
        ServiceEvents("template", bus).on("saved", template.append)

        ServiceEvents("font", bus).emit("saved", 1)

        assert font == [1]
        assert template == []
