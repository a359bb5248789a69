"""Built-in fractal models, in the same JSON shape ``parse_catalog`` reads.

Omitted keys take the model defaults: 4 iterations, initial value "F",
initial angle 90 (pointing up) and start position (0.5, 1.0), the middle of
the bottom edge.
"""

MODELS = [
    {
        "name": "Weed",
        "angle_step": 25.0,
        "segments": 3.0,
        "mapping": {"F": "F[-F]F[+F]F"},
    },
    {
        "name": "Weed 2",
        "iterations": 6,
        "angle_step": 25.0,
        "segments": 2.4,
        "initial_value": "X",
        "initial_angle": 60.0,
        "initial_position": {"x": 0.2, "y": 0.9},
        "mapping": {"X": "F-[[X]+X]+F[+FX]-X", "F": "FF"},
    },
    {
        "name": "Vine",
        "angle_step": 70.0,
        "segments": 3.0,
        "mapping": {"F": "FF+F+F+FF+F+F-F"},
    },
    {
        "name": "Design 1",
        "iterations": 5,
        "angle_step": 90.0,
        "segments": 3.0,
        "mapping": {"F": "FF[-F-F][+F+F]F"},
    },
    {
        "name": "Design 2",
        "iterations": 5,
        "angle_step": 90.0,
        "segments": 3.0,
        "mapping": {"F": "F[|+F][|-F]F[-F][+F]F"},
    },
    {
        "name": "Design 3",
        "iterations": 5,
        "angle_step": 60.0,
        "segments": 2.75,
        "initial_value": "[FX][+FX][|+FX][-FX][|-FX][|FX]",
        "initial_position": {"x": 0.5, "y": 0.5},
        "mapping": {"X": "[FX][+FX][|+FX][-FX][|-FX]", "F": "FF"},
    },
    {
        "name": "Design 4",
        "iterations": 7,
        "angle_step": 90.0,
        "segments": 2.75,
        "initial_value": "[|Y][FXFX][+FXFXFX-FXFX][-FXFXFX+FXFX]",
        "initial_angle": 0.0,
        "initial_position": {"x": 0.25, "y": 0.5},
        "mapping": {
            "X": "[FX][+FX][-FX]",
            "Y": "[FX][+FX][-FX][|FX]",
            "F": "FF",
        },
    },
    {
        "name": "Peano",
        "angle_step": 90.0,
        "segments": 3.0,
        "initial_value": "X",
        "initial_position": {"x": 0.0, "y": 1.0},
        "mapping": {
            "X": "XFYFX+F+YFXFY-F-XFYFX",
            "Y": "YFXFY-F-XFYFX+F+YFXFY",
        },
    },
    {
        "name": "Space-filling 2",
        "iterations": 6,
        "angle_step": 90.0,
        "segments": 2.0,
        "initial_value": "X",
        "initial_angle": -90.0,
        "initial_position": {"x": 0.0, "y": 0.0},
        "mapping": {"X": "-YF+XFX+FY-", "Y": "+XF-YFY-FX+"},
    },
    {
        "name": "Koch",
        "angle_step": 60.0,
        "segments": 3.0,
        "mapping": {"F": "F-F++F-F"},
    },
    {
        "name": "Koch 2",
        "angle_step": 90.0,
        "segments": 3.0,
        "mapping": {"F": "F-F+F+F-F"},
    },
    {
        "name": "Koch Snowflake",
        "angle_step": 60.0,
        "segments": 3.1,
        "initial_value": "F++F++F",
        "initial_angle": 120.0,
        "mapping": {"F": "F-F++F-F"},
    },
    {
        "name": "Sierpinski",
        "iterations": 8,
        "angle_step": 60.0,
        "segments": 2.0,
        "initial_value": "A",
        "initial_angle": -60.0,
        "initial_position": {"x": 0.5, "y": 0.05},
        "mapping": {"A": "B-A-B", "B": "A+B+A"},
        "final_mapping": {"A": "F", "B": "F"},
    },
    {
        "name": "Carpet",
        "angle_step": 90.0,
        "segments": 3.0,
        "mapping": {"F": "F+F-F-F-f+F+F+F-F", "f": "fff"},
    },
    {
        "name": "Median",
        "iterations": 8,
        "angle_step": 45.0,
        "segments": 1.645,
        "initial_value": "L--F--L--F",
        "mapping": {"L": "+R-F-R+", "R": "-L+F+L-"},
        "final_mapping": {"L": "F", "R": "F"},
    },
    {
        "name": "Dragon",
        "iterations": 10,
        "angle_step": 90.0,
        "segments": 1.5,
        "initial_value": "FX",
        "initial_position": {"x": 0.3, "y": 0.6},
        "mapping": {"X": "X+YF", "Y": "FX-Y"},
    },
    {
        "name": "Gosper",
        "angle_step": 60.0,
        "segments": 3.0,
        "initial_value": "XF",
        "initial_angle": 30.0,
        "initial_position": {"x": 0.4, "y": 0.2},
        "mapping": {
            "X": "X+YF++YF-FX--FXFX-YF+",
            "Y": "-FX+YFYF++YF+FX--FX-Y",
        },
    },
    {
        "name": "Penrose",
        "angle_step": 36.0,
        "segments": 2.0,
        "initial_value": "[7]++[7]++[7]++[7]++[7]",
        "initial_position": {"x": 0.5, "y": 0.5},
        # Digits are nonterminals only; '1' becomes a stroke after the last pass.
        "mapping": {
            "6": "81++91----71[-81----61]++",
            "7": "+81--91[---61--71]+",
            "8": "-61++71[+++81++91]-",
            "9": "--81++++61[+91++++71]--71",
            "1": "",
        },
        "final_mapping": {"1": "F"},
    },
    {
        "name": "Pleasant Error",
        "angle_step": 72.0,
        "segments": 3.05,
        "initial_value": "F-F-F-F-F",
        "initial_angle": 18.0,
        "initial_position": {"x": 0.375, "y": 0.075},
        "mapping": {"F": "F-F++F+F-F-F"},
    },
    {
        "name": "Lace",
        "iterations": 6,
        "angle_step": 30.0,
        "segments": 2.11,
        "initial_value": "W",
        "initial_position": {"x": 0.0, "y": 1.0},
        "mapping": {
            "W": "+++X--F--ZFX+",
            "X": "---W++F++YFW-",
            "Y": "+ZFX--F--Z+++",
            "Z": "-YFW++F++Y---",
        },
        "final_mapping": {"W": "F", "X": "F", "Y": "F", "Z": "F"},
    },
]
