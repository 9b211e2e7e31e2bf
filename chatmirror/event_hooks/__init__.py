"""Gateway event hooks invoked by :mod:`chatmirror.clients.disc`."""
