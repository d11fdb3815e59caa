# saltedaes/crypto/aes_pure.py

from typing import List

from saltedaes.common.format import BLOCK_SIZE, KEY_SIZE

ROUNDS = 10  # AES-128
SCHEDULE_SIZE = BLOCK_SIZE * (ROUNDS + 1)  # 176 bytes


def _xtime(a: int) -> int:
    """Multiplies by x (0x02) in GF(2^8) modulo the AES polynomial."""
    a <<= 1
    if a & 0x100:
        a ^= 0x11B
    return a


def _gmul(a: int, b: int) -> int:
    result = 0
    while b:
        if b & 1:
            result ^= a
        a = _xtime(a)
        b >>= 1
    return result


def _rotl8(x: int, shift: int) -> int:
    return ((x << shift) | (x >> (8 - shift))) & 0xFF


def _build_sboxes():
    """Builds the S-box from GF(2^8) inverses and the affine transform."""
    sbox = [0] * 256
    p = q = 1
    while True:
        # p walks the field by multiplying with 3, q by dividing with 3
        p = p ^ _xtime(p)
        q ^= (q << 1) & 0xFF
        q ^= (q << 2) & 0xFF
        q ^= (q << 4) & 0xFF
        if q & 0x80:
            q ^= 0x09
        x = q ^ _rotl8(q, 1) ^ _rotl8(q, 2) ^ _rotl8(q, 3) ^ _rotl8(q, 4)
        sbox[p] = x ^ 0x63
        if p == 1:
            break
    sbox[0] = 0x63

    inv_sbox = [0] * 256
    for i, s in enumerate(sbox):
        inv_sbox[s] = i
    return sbox, inv_sbox


SBOX, INV_SBOX = _build_sboxes()
MUL2 = [_gmul(i, 2) for i in range(256)]
MUL3 = [_gmul(i, 3) for i in range(256)]
MUL9 = [_gmul(i, 9) for i in range(256)]
MUL11 = [_gmul(i, 11) for i in range(256)]
MUL13 = [_gmul(i, 13) for i in range(256)]
MUL14 = [_gmul(i, 14) for i in range(256)]

# State is column-major: byte i sits at row i % 4, column i // 4.
SHIFT_ROWS = [(r + 4 * ((c + r) % 4)) for c in range(4) for r in range(4)]
INV_SHIFT_ROWS = [0] * 16
for _dst, _src in enumerate(SHIFT_ROWS):
    INV_SHIFT_ROWS[_src] = _dst
del _dst, _src


def expand_key(key: bytes) -> bytes:
    """AES-128 key expansion: 16-byte key -> 176-byte round key schedule."""
    if len(key) != KEY_SIZE:
        raise ValueError(f"AES key must be {KEY_SIZE} bytes.")

    w = bytearray(key)
    rcon = 1
    while len(w) < SCHEDULE_SIZE:
        t = list(w[-4:])
        if len(w) % KEY_SIZE == 0:
            # RotWord, SubWord, Rcon
            t = [SBOX[t[1]] ^ rcon, SBOX[t[2]], SBOX[t[3]], SBOX[t[0]]]
            rcon = _xtime(rcon)
        base = len(w) - KEY_SIZE
        w.extend([w[base + i] ^ t[i] for i in range(4)])
    return bytes(w)


def _add_round_key(state: List[int], schedule: bytes, rnd: int):
    offset = rnd * BLOCK_SIZE
    for i in range(BLOCK_SIZE):
        state[i] ^= schedule[offset + i]


def _mix_columns(state: List[int]):
    for c in range(0, 16, 4):
        a0, a1, a2, a3 = state[c:c + 4]
        state[c] = MUL2[a0] ^ MUL3[a1] ^ a2 ^ a3
        state[c + 1] = a0 ^ MUL2[a1] ^ MUL3[a2] ^ a3
        state[c + 2] = a0 ^ a1 ^ MUL2[a2] ^ MUL3[a3]
        state[c + 3] = MUL3[a0] ^ a1 ^ a2 ^ MUL2[a3]


def _inv_mix_columns(state: List[int]):
    for c in range(0, 16, 4):
        a0, a1, a2, a3 = state[c:c + 4]
        state[c] = MUL14[a0] ^ MUL11[a1] ^ MUL13[a2] ^ MUL9[a3]
        state[c + 1] = MUL9[a0] ^ MUL14[a1] ^ MUL11[a2] ^ MUL13[a3]
        state[c + 2] = MUL13[a0] ^ MUL9[a1] ^ MUL14[a2] ^ MUL11[a3]
        state[c + 3] = MUL11[a0] ^ MUL13[a1] ^ MUL9[a2] ^ MUL14[a3]


def encrypt_block(block: bytes, schedule: bytes) -> bytes:
    state = list(block)
    _add_round_key(state, schedule, 0)
    for rnd in range(1, ROUNDS + 1):
        # SubBytes + ShiftRows in one pass
        state = [SBOX[state[i]] for i in SHIFT_ROWS]
        if rnd != ROUNDS:
            _mix_columns(state)
        _add_round_key(state, schedule, rnd)
    return bytes(state)


def decrypt_block(block: bytes, schedule: bytes) -> bytes:
    state = list(block)
    _add_round_key(state, schedule, ROUNDS)
    for rnd in range(ROUNDS - 1, -1, -1):
        state = [INV_SBOX[state[i]] for i in INV_SHIFT_ROWS]
        _add_round_key(state, schedule, rnd)
        if rnd != 0:
            _inv_mix_columns(state)
    return bytes(state)


class PythonAES:
    """Table-driven AES-128 in pure Python. Slow, but needs no native backend."""
    name = "python"

    def expand(self, key: bytes) -> bytes:
        return expand_key(key)

    def encrypt_block(self, block: bytes, schedule: bytes) -> bytes:
        if len(block) != BLOCK_SIZE:
            raise ValueError(f"AES block must be {BLOCK_SIZE} bytes, got {len(block)}.")
        return encrypt_block(block, schedule)

    def decrypt_block(self, block: bytes, schedule: bytes) -> bytes:
        if len(block) != BLOCK_SIZE:
            raise ValueError(f"AES block must be {BLOCK_SIZE} bytes, got {len(block)}.")
        return decrypt_block(block, schedule)
