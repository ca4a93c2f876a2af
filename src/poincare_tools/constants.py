"""Fixed constants: default view, shading, pens, capacity limits.

Defaults are those of poincare 1.24.
"""

import math

VERSION_NUMBER = '1.24'
PROGRAM_NAME = 'poincare-tools'

DEG2RAD = math.pi / 180.0
RAD2DEG = 180.0 / math.pi

# View orientation (degrees; converted to radians in ViewState)
DEFAULT_ROT_PSI_DEG = -40.0  # first rotation, about z
DEFAULT_ROT_PHI_DEG = 15.0  # second rotation, about y

# Point light source for the Phong-shaded sphere (degrees)
DEFAULT_PHI_SOURCE_DEG = 30.0  # counterclockwise from three o'clock, seen by the observer
DEFAULT_THETA_SOURCE_DEG = 30.0  # between light source and observer, seen from sphere center

# Whiteness: 0.0 is black, 1.0 is white
DEFAULT_MAX_WHITENESS = 0.99
DEFAULT_MIN_WHITENESS = 0.75
DEFAULT_HIDDEN_GRAYTONE = 0.65
EQUATOR_WHITENESS = 0.55  # eqcolval .45 [white,black]
AXIS_INSIDE_WHITENESS = 0.15  # insidecolval .85 [white,black]

# Shading grid resolution (cells along radius and around the disk)
DEFAULT_RHO_STEPS = 50
DEFAULT_PHI_STEPS = 80

DEFAULT_POSITIVE_AXIS_LENGTH = 1.5
DEFAULT_NEGATIVE_AXIS_LENGTH = 0.1

# Pens (PostScript points) and arrow heads (degrees)
DEFAULT_PATH_THICKNESS = 1.0
DEFAULT_ARROW_THICKNESS = 0.6
DEFAULT_ARROW_HEADANGLE = 30.0
DEFAULT_TICKSIZE = 4 * DEFAULT_PATH_THICKNESS

# Sphere radius in millimetres
DEFAULT_SCALEFACTOR = 6.0

# Offset of tick mark ends from the unit Stokes vector (sphere radius units).
# Independent of the configured tick size.
TICK_OFFSET = 0.028213

# Geodesic arrows: interpolation step in t over [0, 1]
ARROW_DT = 0.02
DEFAULT_ARROW_STEPS = round(0.5 / ARROW_DT)  # steps per half

# Equator sampling (points per visible half circle)
EQUATOR_SAMPLES = 73

# Capacity limits
MAX_NUM_STOKE_COORDS = 5000
MAX_NUM_TICKMARKS = MAX_NUM_STOKE_COORDS // 10
MAX_NUM_LABELS = MAX_NUM_TICKMARKS // 10
MAX_LABEL_TEXTLENGTH = 256
MAX_NUM_ARROWS = 24
MAX_SHADING_CELLS = 250000

# MetaPost output
NUM_COORDS_PER_METAPOST_LINE = 3
DEFAULT_OUTFILENAME = 'aout.mp'
DEFAULT_EPSJOBNAME = 'aout'
DEFAULT_AXISLABELS = ('S_1', 'S_2', 'S_3')
NORMALIZED_AXISLABELS = ('S_1/S_0', 'S_2/S_0', 'S_3/S_0')
DEFAULT_AXISLABELPOSITION = 'urt'

# Millimetres per TeX point (bounding box report)
MM_PER_PT = 25.4 / 72.27
