"""Map domain model.

* Strongly typed scalar wrappers (see :mod:`wrappers` and :mod:`calendar`).
* Enumerations shared by the catalogs (see :mod:`enums`).
* One module per map file family, each owning its frozen dataclasses and the
  ``from_file``/``from_dir`` constructor that reads them.
"""
