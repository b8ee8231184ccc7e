from notifications.services import AdminConnectionRegistry


def test_counts_connections_per_admin():
    registry = AdminConnectionRegistry()
    registry.register_connection(1, "chan-a")
    registry.register_connection(1, "chan-b")
    registry.register_connection(2, "chan-c")

    assert registry.get_active_connections_count() == 3
    assert sorted(registry.get_connected_admin_ids()) == [1, 2]


def test_unregister_last_connection_forgets_admin():
    registry = AdminConnectionRegistry()
    registry.register_connection(1, "chan-a")

    registry.unregister_connection(1, "chan-a")
    registry.unregister_connection(1, "chan-a")
    registry.unregister_connection(99, "missing")

    assert not registry.is_user_connected(1)
    assert registry.get_active_connections_count() == 0
