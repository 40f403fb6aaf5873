"""
Run script for a small test case of four grid cells, read in from a soil
parameter file. Cell 3 is switched off in the soil file.
Run from this folder with `lakeinit -i model_setup.py`.
"""

lake_param_path = "lake_param.txt"
soil_param_path = "soil_param.txt"
resolution = 0.5

# Vegetation already covers most of cell 4, so its lake is trimmed to fit.
cv_sum = {1: 0.45, 2: 0.6, 4: 0.85}

output_filepath = "output/columbia_lakes.nc"
diagnostic_plots = False
