"""Command-line option parsing and schema validation for defender-deploy-cli."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .exceptions import ValidationError

OptionValue = Union[str, bool]

HELP_OPTION = "help"
SHORT_ALIASES = {"h": HELP_OPTION}

_BOOLEAN_LITERALS = {"true": True, "false": False}


class OptionKind(Enum):
    """Value type of an option."""

    STRING = "string"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class OptionSpec:
    """A single recognized option of a command."""

    name: str
    kind: OptionKind = OptionKind.STRING
    required: bool = False
    default: Optional[OptionValue] = None


@dataclass(frozen=True)
class OptionSchema:
    """
    Closed set of options recognized by one command.

    The command name doubles as the only positional argument the command
    accepts.
    """

    command: str
    options: Tuple[OptionSpec, ...]

    @property
    def names(self) -> List[str]:
        return [spec.name for spec in self.options]

    @property
    def boolean_names(self) -> List[str]:
        return [spec.name for spec in self.options if spec.kind is OptionKind.BOOLEAN]

    def apply(self, parsed: "ParsedArgs") -> Dict[str, Any]:
        """
        Validate parsed arguments against this schema.

        Every violation is collected before raising, so a single run reports
        all missing, empty and unrecognized options together.

        Args:
            parsed: Tokenized command-line arguments

        Returns:
            Dictionary mapping every option name in the schema to its value,
            with defaults applied and None for unset optional strings

        Raises:
            ValidationError: If any positional argument or option is invalid
        """
        violations = self._check_positionals(parsed.positionals)

        values: Dict[str, Any] = {}
        for spec in self.options:
            value = parsed.options.get(spec.name)

            if spec.kind is OptionKind.BOOLEAN:
                if value is None:
                    value = True if spec.default is None else spec.default
                elif isinstance(value, str):
                    if value.lower() not in _BOOLEAN_LITERALS:
                        violations.append(
                            f"Invalid option: --{spec.name} must be true or false"
                        )
                        continue
                    value = _BOOLEAN_LITERALS[value.lower()]
                values[spec.name] = value
                continue

            if isinstance(value, bool):
                # Bare or negated flag given for a string option
                value = ""
            if value is not None and len(value.strip()) == 0:
                violations.append(f"Invalid option: --{spec.name} cannot be empty")
            elif value is None and spec.required:
                violations.append(f"Missing required option: --{spec.name}")
            values[spec.name] = value if value is not None else spec.default

        unrecognized = [
            name
            for name in parsed.options
            if name != HELP_OPTION and name not in self.names
        ]
        if unrecognized:
            violations.append(f"Invalid options: {', '.join(unrecognized)}")

        if violations:
            raise ValidationError(violations)

        return values

    def _check_positionals(self, positionals: List[str]) -> List[str]:
        if not positionals:
            return [f"Missing command. Supported commands are: {self.command}"]
        if positionals[0] != self.command:
            return [
                f"Invalid command: {positionals[0]}. "
                f"Supported commands are: {self.command}"
            ]
        if len(positionals) > 1:
            return [
                f"The {self.command} command does not take any arguments, only options."
            ]
        return []


@dataclass
class ParsedArgs:
    """Raw tokenized arguments: positionals plus every flag seen."""

    positionals: List[str] = field(default_factory=list)
    options: Dict[str, OptionValue] = field(default_factory=dict)

    @property
    def help_requested(self) -> bool:
        """True if usage should be shown instead of running the command."""
        value = self.options.get(HELP_OPTION)
        if isinstance(value, str):
            value = _BOOLEAN_LITERALS.get(value.lower(), False)
        return not self.positionals or value is True


def parse_args(args: Sequence[str], schema: Optional[OptionSchema] = None) -> ParsedArgs:
    """
    Tokenize a raw argument list.

    Supported forms:
    - ``--name value`` and ``--name=value``
    - ``--flag`` / ``--no-flag`` and ``--flag true|false`` for boolean options
    - ``-h`` and other single-letter switches
    - ``--`` ends option parsing

    Unknown options are kept so that schema validation can report them.

    Args:
        args: Argument list, without the program name
        schema: Schema used to tell boolean options from string options

    Returns:
        ParsedArgs with positionals in order and the last value of each option
    """
    booleans = set(schema.boolean_names if schema is not None else [])
    booleans.add(HELP_OPTION)
    strings = set(schema.names if schema is not None else []) - booleans

    parsed = ParsedArgs()
    tokens = list(args)
    i = 0
    while i < len(tokens):
        token = tokens[i]
        following = tokens[i + 1] if i + 1 < len(tokens) else None

        if token == "--":
            parsed.positionals.extend(tokens[i + 1 :])
            break

        if token.startswith("--"):
            name, sep, inline = token[2:].partition("=")
            if sep:
                parsed.options[name] = inline
            elif name.startswith("no-") and name[3:] not in strings:
                parsed.options[name[3:]] = False
            elif name in booleans:
                if following is not None and following.lower() in _BOOLEAN_LITERALS:
                    parsed.options[name] = following
                    i += 1
                else:
                    parsed.options[name] = True
            elif following is not None and not following.startswith("-"):
                parsed.options[name] = following
                i += 1
            else:
                parsed.options[name] = "" if name in strings else True
        elif token.startswith("-") and len(token) > 1:
            for letter in token[1:]:
                parsed.options[SHORT_ALIASES.get(letter, letter)] = True
        else:
            parsed.positionals.append(token)
        i += 1

    return parsed
