"""
Shorthands to read a batch of options into variables or attributes of the same name.

    read_options(self, options["solver"], atol=1e-10, max_nb_iters=100)

reads "solver:atol" and "solver:max_nb_iters" into `self.atol` and
`self.max_nb_iters`, each falling back on the given default.
"""

from option_tree.options import Options


def option(options: Options, name: str, default):
    """Read the option `name` below `options`, `default` if it is not set."""
    return options.get(name, default)


def read_options(target, options: Options, **defaults):
    """Set an attribute on `target` for each keyword, read from the option of the same name."""
    for [name, default] in defaults.items():
        setattr(target, name, option(options, name, default))
    return target
