"""mrusim — uniform rectilinear motion (MRU) velocity simulator."""
