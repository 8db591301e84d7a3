"""
Physical constants for radchem calculations.

All constants are in SI base units unless otherwise specified.
Table unit factors (Rydberg, megabarn) convert tabulated data into SI.
"""

# ============================================================================
# Fundamental Constants
# ============================================================================

# Boltzmann constant
KB = 1.380649e-23  # J/K

# Planck constant
H_PLANCK = 6.62607015e-34  # J·s

# Speed of light
C_LIGHT = 2.99792458e8  # m/s

# Elementary charge
E_CHARGE = 1.602176634e-19  # C

# Avogadro constant
N_AVOGADRO = 6.02214076e23  # mol^-1

# ============================================================================
# Atomic Physics Constants
# ============================================================================

# Rydberg energy (hydrogen ionization energy, infinite nuclear mass)
RYDBERG_ENERGY = 2.1798723611e-18  # J

# Hydrogen photoionization cross section at threshold
HYDROGEN_XS_THRESHOLD = 6.30431812e-22  # m^2

# Molar masses
MOLAR_MASS_ELECTRON = 5.48579909065e-7  # kg/mol
MOLAR_MASS_HYDROGEN = 1.00794e-3  # kg/mol
MOLAR_MASS_HELIUM = 4.002602e-3  # kg/mol

# ============================================================================
# Conversion Factors
# ============================================================================

# Energy conversions
EV_TO_J = E_CHARGE  # 1 eV = E_CHARGE J
RY_TO_J = RYDBERG_ENERGY

# Cross-section conversions
MEGABARN = 1.0e-22  # m^2
BARN = 1.0e-28  # m^2

# Default band wavelength unit (nm)
WAVELENGTH_TO_METERS = 1.0e-9

# Default floor on cell temperature (K)
TEMPERATURE_FLOOR = 1.0

# ============================================================================
# Rate Coefficients (hydrogen, SI)
# ============================================================================

# Case-B recombination: alpha_B = 2.59e-19 * (T / 1e4)^-0.7 m^3 s^-1
ALPHA_B_COEFF = 2.59e-19  # m^3 s^-1
ALPHA_B_TREF = 1.0e4  # K
ALPHA_B_EXPONENT = -0.7

# Recombination cooling: 6.11e-16 * T^-0.89 * k_B T  J m^3 s^-1
RECOMB_COOLING_COEFF = 6.11e-16  # m^3 s^-1
RECOMB_COOLING_EXPONENT = -0.89

# Lyman-alpha cooling: 7.5e-32 * exp(-118348 / T)  J m^3 s^-1
LYA_COOLING_COEFF = 7.5e-32  # J m^3 s^-1
LYA_COOLING_TEMP = 118348.0  # K
