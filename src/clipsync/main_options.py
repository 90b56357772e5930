"""Click option helpers for the mutually exclusive run modes."""
import click


def _option_label(ctx: click.Context, name: str) -> str:
    """Return the first command-line spelling of a parameter."""
    for param in ctx.command.params:
        if param.name == name and param.opts:
            return param.opts[0]
    return f"--{name}"


class MutuallyExclusiveOption(click.Option):
    """Click option that may not be combined with the listed options.

    Only options given on the command line count; values from environment
    variables never trigger the check.
    """

    def __init__(self, *args, **kwargs):
        """Initialize with exclusive_with: names of conflicting parameters."""
        self.exclusive_with = kwargs.pop("exclusive_with", [])
        super().__init__(*args, **kwargs)

    def handle_parse_result(self, ctx, opts, args):
        """Raise UsageError if a conflicting option was also given."""
        if self.name in opts:
            for other in self.exclusive_with:
                if other in opts:
                    msg = (
                        f"Options {_option_label(ctx, self.name)} and "
                        f"{_option_label(ctx, other)} are mutually exclusive"
                    )
                    raise click.UsageError(msg, ctx=ctx)
        return super().handle_parse_result(ctx, opts, args)
