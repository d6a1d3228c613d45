import pytest


SAMPLE_BOARD = """\
(kicad_pcb (version 20221018) (generator pcbnew)
  (general (thickness 1.6))
  (layers
    (0 "F.Cu" signal)
    (31 "B.Cu" signal)
    (35 "F.Paste" user)
    (34 "B.Paste" user)
  )
  (footprint "Resistor_SMD:R_0603_1608Metric" (layer "F.Cu")
    (at 100 100)
    (property "Reference" "R1")
    (pad "1" smd roundrect (at -0.825 0) (size 0.8 0.95) (layers "F.Cu" "F.Paste" "F.Mask") (roundrect_rratio 0.25))
    (pad "2" smd roundrect (at 0.825 0) (size 0.8 0.95) (layers "F.Cu" "F.Paste" "F.Mask") (roundrect_rratio 0.25))
  )
  (footprint "Package_BGA:Test" (layer "B.Cu")
    (at 120 100)
    (pad "A1" smd circle (at 0 0) (size 2 2) (layers "B.Cu" "B.Paste" "B.Mask"))
  )
  (footprint "Connector_PinHeader:PinHeader_1x01" (layer "F.Cu")
    (at 140 100)
    (pad "1" thru_hole rect (at 0 0) (size 1.7 1.7) (drill 1) (layers "*.Cu" "*.Mask"))
  )
  (footprint "Test:Odd_Pads" (layer "F.Cu")
    (at 160 100)
    (pad "1" smd rect (at 0 0) (size 2 3) (layers "F.Cu" "F.Mask"))
    (pad "2" smd trapezoid (at 0 0) (size 1 1) (layers "F.Cu" "F.Paste"))
    (pad "3" smd rect (at 0 0) (layers "F.Cu" "F.Paste"))
  )
  (segment (start 100 100) (end 120 100) (width 0.25) (layer "F.Cu") (net 1))
)
"""


@pytest.fixture
def sample_board() -> str:
    return SAMPLE_BOARD


@pytest.fixture
def sample_board_file(tmp_path):
    path = tmp_path / "sample.kicad_pcb"
    path.write_text(SAMPLE_BOARD, encoding="utf-8")
    return path
