"""Unit conversion between screen pixels (96 DPI), EMU and points"""
from pptx.util import Emu, Pt  # type: ignore[import]

EMU_PER_PX = 9525
PT_PER_PX = 0.75


def px_to_emu(px: float) -> Emu:
    return Emu(int(round(px * EMU_PER_PX)))


def emu_to_px(emu: int) -> float:
    return float(emu) / EMU_PER_PX


def px_to_pt(px: float) -> Pt:
    return Pt(px * PT_PER_PX)
