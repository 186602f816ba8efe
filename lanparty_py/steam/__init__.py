"""
Steam library handling for lan-party-tools.

This package reads ``appmanifest_<appid>.acf`` files, lists the installed
games of a ``steamapps`` folder, and backs up or restores games together with
their manifests.
"""
