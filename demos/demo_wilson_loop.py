import numpy as np
import matplotlib.pyplot as plt
from qwzlab import WilsonSettings, chern_scan, run_wilson_loop

# 1) One mass inside the topological window
settings = WilsonSettings(nk=60)
res = run_wilson_loop(-1.0, settings)
kx = res.kpoints[:, 0, 0]

# 2) Coarser scan across the phase diagram; critical masses 0, +-2 are skipped
masses = np.array([m for m in np.linspace(-3.0, 3.0, 25) if min(abs(m - c) for c in (-2.0, 0.0, 2.0)) > 1e-6])
scan = chern_scan(masses, WilsonSettings(nk=30))

#---- Plots (each in its own figure; default styles) ----
plt.figure()
plt.title(f"Unwrapped Wilson-loop phase, M={res.mass:g}")
plt.plot(kx, res.phases, ".-")
plt.xlabel("kx"); plt.ylabel("phase")
plt.tight_layout(); plt.savefig("wilson_phase_track.png", dpi=180)

plt.figure()
plt.title("Chern number across M")
plt.plot(scan["mass"], scan["chern_number"], "o", label="open seam")
plt.plot(scan["mass"], scan["closed_chern_number"], "x", label="closed seam")
for m_c in (-2.0, 0.0, 2.0):
    plt.axvline(m_c, color="grey", lw=0.5)
plt.xlabel("M"); plt.ylabel("C"); plt.legend()
plt.tight_layout(); plt.savefig("chern_vs_mass.png", dpi=180)

print(f"C(M={res.mass:g}) = {res.chern_number:.4f} (closed {res.closed_chern_number:.4f})")
print("Wrote wilson_phase_track.png, chern_vs_mass.png")
