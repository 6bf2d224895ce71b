from collections import deque

from .. import config


# %% Key names

# A printable character is represented by itself (a str of length 1). Other
# keys are represented by these names.
ENTER = "enter"
BACKSPACE = "backspace"
DELETE = "delete"
UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
TAB = "tab"
ESCAPE = "escape"
INTERRUPT = "ctrl+c"

NAMED_KEYS = frozenset(
    [ENTER, BACKSPACE, DELETE, UP, DOWN, LEFT, RIGHT, TAB, ESCAPE, INTERRUPT]
)


def is_char(key):
    """Get whether the given key is a printable character."""
    return len(key) == 1 and key.isprintable()


# %% Decoder


class EscapeCodeDecoder:
    """A streaming input key decoder.

    Turns text read from a terminal into a list of keys. Escape codes that
    are not in the map are dropped, so that garbage never ends up in a
    prompt's buffer.
    """

    def __init__(self, max_pending=None):

        # We remove the double-escape, because it captures cases where
        # an escape is followed by another escape code, causing the
        # remainder of that escape code to be interpreted as characters.
        # At the end of decode() we dedupe.
        map = KEY_MAP.copy()
        map.pop("\x1b\x1b")
        self._key_tree = build_tree(map)
        self._branch = self._key_tree
        self._chars = deque()
        self._pending = []  # chars consumed while walking the tree
        self._skipping = False  # inside an unknown CSI sequence
        if max_pending is None:
            max_pending = config.MAX_ESCAPE_LENGTH
        self._max_pending = max_pending

    @property
    def pending(self):
        """Whether the decoder holds a partial escape code."""
        return bool(self._pending) or self._skipping

    def decode(self, text, flush=False):
        """Decode the given string.

        Escape codes can be split between multiple calls to decode.
        Without a flush, a lonely escape char will not be decoded until
        new chars are decoded. Flushing is what the reader does when no
        more chars arrive within the escape timeout: a partial escape code
        then becomes an escape key, and the chars that followed it are
        handled as normal chars.
        """

        self._chars.extend(text)
        result = []

        self._process(result)

        if flush:
            if self._skipping:
                self._skipping = False
            elif self._pending:
                self._give_up(result)
                self._process(result)

        # Consolidate double-escapes
        to_pop = []
        may_be_double_esc = False
        for i in range(len(result)):
            is_esc = result[i] == ESCAPE
            if is_esc and may_be_double_esc:
                to_pop.append(i)
                may_be_double_esc = False
            else:
                may_be_double_esc = is_esc
        for i in reversed(to_pop):
            result.pop(i)

        return result

    def _reset_tree(self):
        self._branch = self._key_tree
        self._pending = []

    def _give_up(self, result):
        # Resolve the partial escape code; either it resolves to a shorter
        # key, or it becomes an escape, followed by the other chars.
        if "" in self._branch:
            result.extend(self._branch[""])
            rest = []
        else:
            result.append(ESCAPE)
            rest = self._pending[1:]
        self._reset_tree()
        self._chars.extendleft(reversed(rest))

    def _process(self, result):
        while True:

            # Get a char
            try:
                c = self._chars.popleft()
            except IndexError:
                break  # empty

            if c == "\x03":
                # Ctrl-C never waits behind a partial escape code
                self._reset_tree()
                self._skipping = False
                result.append(INTERRUPT)
            elif self._skipping:
                # Swallow an unknown CSI sequence up to its final byte
                if "\x40" <= c <= "\x7e":
                    self._skipping = False
                elif not "\x20" <= c <= "\x3f":
                    self._skipping = False
                    self._chars.appendleft(c)
            elif c in self._branch:
                # Walk the tree, can be result or new branch
                tree_result = self._branch[c]
                if isinstance(tree_result, dict):
                    self._branch = tree_result
                    self._pending.append(c)
                    if len(self._pending) > self._max_pending:
                        self._give_up(result)
                else:  # == isinstance(tree_result, tuple):
                    self._reset_tree()
                    result.extend(tree_result)
            elif self._branch is self._key_tree:
                # A normal character. Control chars that are not in the map
                # are ignored.
                if c.isprintable():
                    result.append(c)
            elif "" in self._branch:
                # We were traversing the tree, and it resolves to a value.
                # Reset tree and put character back for next iter.
                result.extend(self._branch[""])
                self._reset_tree()
                self._chars.appendleft(c)
            elif self._pending[:2] == ["\x1b", "["]:
                # An unknown CSI sequence, skip the rest of it
                self._reset_tree()
                self._skipping = True
                self._chars.appendleft(c)
            elif self._pending[:2] == ["\x1b", "O"]:
                # An unknown SS3 sequence, c is its final char
                self._reset_tree()
            else:
                self._reset_tree()
                self._chars.appendleft(c)


def build_tree(map):
    """Build a tree from a flat map, so it can be traversed while decoding incoming chars."""
    trunk = {}
    for text, keys in map.items():
        branch = trunk
        while len(text) > 1:
            char, text = text[0], text[1:]
            new_branch = branch.setdefault(char, {})
            if not isinstance(new_branch, dict):
                branch[char] = new_branch = {"": new_branch}
            branch = new_branch
        if isinstance(branch.get(text), dict):
            branch[text][""] = keys
        else:
            branch[text] = keys
    assert "" not in trunk  # Sanity check
    return trunk


# %% A flat mapping of vt100 escape codes to keys

# This is the subset of the vt100/xterm key codes (as collected by Textual and
# prompt_toolkit) that maps onto the keys a prompt cares about. Modified
# variants (ctrl+up etc.) map to the plain key.

KEY_MAP = {
    # Control keys.
    "\r": (ENTER,),
    "\n": (ENTER,),  # Piped input ends lines with LF
    "\x03": (INTERRUPT,),  # Control-C, handled before the tree, see decoder
    "\x08": (BACKSPACE,),  # Control-H (8) (Identical to '\b')
    "\x09": (TAB,),  # Control-I (9) (Identical to '\t')
    "\x1b": (ESCAPE,),  # Also Control-[
    # Windows issues esc esc for a single press of escape key
    "\x1b\x1b": (ESCAPE,),
    # ASCII Delete (0x7f)
    # Vt220 (and Linux terminal) send this when pressing backspace.
    # See: http://www.ibb.net/~anne/keyboard.html
    "\x7f": (BACKSPACE,),
    # Delete
    "\x1b[3~": (DELETE,),
    "\x1b[3;2~": (DELETE,),  # shift+delete, xterm, gnome-terminal.
    "\x1b[3$": (DELETE,),  # shift+delete, rxvt
    "\x1b[3;5~": (DELETE,),  # ctrl+delete, xterm, gnome-terminal.
    "\x1b[3^": (DELETE,),  # ctrl+delete, rxvt
    # Keypad enter in application mode
    "\x1bOM": (ENTER,),
    # --
    # Arrows.
    # (Normal cursor mode).
    "\x1b[A": (UP,),
    "\x1b[B": (DOWN,),
    "\x1b[C": (RIGHT,),
    "\x1b[D": (LEFT,),
    # (Application cursor mode).
    "\x1bOA": (UP,),
    "\x1bOB": (DOWN,),
    "\x1bOC": (RIGHT,),
    "\x1bOD": (LEFT,),
    # Shift + arrows.
    "\x1b[1;2A": (UP,),
    "\x1b[1;2B": (DOWN,),
    "\x1b[1;2C": (RIGHT,),
    "\x1b[1;2D": (LEFT,),
    # Shift+navigation in rxvt
    "\x1b[a": (UP,),
    "\x1b[b": (DOWN,),
    "\x1b[c": (RIGHT,),
    "\x1b[d": (LEFT,),
    # Control + arrows.
    "\x1b[1;5A": (UP,),
    "\x1b[1;5B": (DOWN,),
    "\x1b[1;5C": (RIGHT,),
    "\x1b[1;5D": (LEFT,),
    # Control arrow keys in rxvt
    "\x1bOa": (UP,),
    "\x1bOb": (DOWN,),
    "\x1bOc": (RIGHT,),
    "\x1bOd": (LEFT,),
    # Shift + tab, the closest thing a prompt has is a plain tab
    "\x1b[Z": (TAB,),
    ############################################################################
    # The ignore section. These are complete sequences that we know, and
    # that should not produce a key.
    ############################################################################
    # Press of 5 on the numeric keypad, when *not* in number mode.
    "\x1b[E": (),  # Xterm.
    "\x1b[G": (),  # Linux console.
}


