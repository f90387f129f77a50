"""CSS vocabulary used to classify identifiers in stylesheet grammars.

The lexer never looks inside these sets; grammar rules consult the
predicates from EmitDynamic classifiers.

Thread Safety:
All data is immutable (frozensets). Safe to call from any thread.

"""

from __future__ import annotations


def _words(text: str) -> frozenset[str]:
    return frozenset(text.split())


CSS_PROPERTIES: frozenset[str] = _words(
    """
    align-content align-items align-self animation animation-delay
    animation-direction animation-duration animation-fill-mode
    animation-iteration-count animation-name animation-play-state
    animation-timing-function azimuth backface-visibility background
    background-attachment background-clip background-color background-image
    background-origin background-position background-repeat background-size
    border border-bottom border-bottom-color border-bottom-left-radius
    border-bottom-right-radius border-bottom-style border-bottom-width
    border-collapse border-color border-image border-left border-left-color
    border-left-style border-left-width border-radius border-right
    border-right-color border-right-style border-right-width border-spacing
    border-style border-top border-top-color border-top-left-radius
    border-top-right-radius border-top-style border-top-width border-width
    bottom box-shadow box-sizing caption-side clear clip color columns content
    counter-increment counter-reset cue cue-after cue-before cursor direction
    display elevation empty-cells filter flex flex-basis flex-direction
    flex-flow flex-grow flex-shrink flex-wrap float font font-family font-size
    font-size-adjust font-stretch font-style font-variant font-weight gap grid
    grid-area grid-column grid-gap grid-row grid-template grid-template-areas
    grid-template-columns grid-template-rows height justify-content left
    letter-spacing line-height list-style list-style-image list-style-position
    list-style-type margin margin-bottom margin-left margin-right margin-top
    marker-offset marks max-height max-width min-height min-width opacity order
    orphans outline outline-color outline-style outline-width overflow
    overflow-x overflow-y padding padding-bottom padding-left padding-right
    padding-top page page-break-after page-break-before page-break-inside pause
    pause-after pause-before pitch pitch-range play-during pointer-events
    position quotes resize richness right size speak speak-header speak-numeral
    speak-punctuation speech-rate stress table-layout text-align
    text-decoration text-indent text-overflow text-shadow text-transform top
    transform transform-origin transition transition-delay transition-duration
    transition-property transition-timing-function unicode-bidi user-select
    vertical-align visibility voice-family volume white-space widows width
    word-break word-spacing word-wrap z-index
    """
)

CSS_BUILTINS: frozenset[str] = _words(
    """
    above absolute always armenian aural auto avoid baseline behind below
    bidi-override blink block bold bolder both capitalize center center-left
    center-right circle cjk-ideographic close-quote collapse condensed
    continuous crop cross crosshair cursive dashed decimal decimal-leading-zero
    default digits disc dotted double e-resize embed expanded extra-condensed
    extra-expanded fantasy far-left far-right fast faster fixed flex georgian
    grid groove hebrew help hidden hide high higher hiragana hiragana-iroha icon
    important inherit initial inline inline-block inline-flex inline-table
    inset inside invert italic justify katakana katakana-iroha landscape large
    larger left-side leftwards level lighter line-through list-item loud low
    lower lower-alpha lower-greek lower-roman lowercase ltr medium message-box
    middle mix monospace n-resize narrower ne-resize no-close-quote
    no-open-quote no-repeat none normal nowrap nw-resize oblique once
    open-quote outset outside overline pointer portrait relative repeat
    repeat-x repeat-y ridge right-side rightwards rtl s-resize sans-serif scroll
    se-resize semi-condensed semi-expanded separate serif show silent slow
    slower small small-caps small-caption smaller soft solid spell-out square
    static status-bar sticky super sw-resize table table-caption table-cell
    table-column table-column-group table-footer-group table-header-group
    table-row table-row-group text-bottom text-top thick thin transparent
    ultra-condensed ultra-expanded underline unset upper-alpha upper-latin
    upper-roman uppercase visible w-resize wait wider x-fast x-high x-large
    x-loud x-low x-small x-soft xx-large xx-small yes
    """
)

CSS_CONSTANTS: frozenset[str] = _words(
    """
    aliceblue antiquewhite aqua aquamarine azure beige bisque black
    blanchedalmond blue blueviolet brown burlywood cadetblue chartreuse
    chocolate coral cornflowerblue cornsilk crimson currentcolor cyan darkblue
    darkcyan darkgoldenrod darkgray darkgreen darkkhaki darkmagenta
    darkolivegreen darkorange darkorchid darkred darksalmon darkseagreen
    darkslateblue darkslategray darkturquoise darkviolet deeppink deepskyblue
    dimgray dodgerblue firebrick floralwhite forestgreen fuchsia gainsboro
    ghostwhite gold goldenrod gray green greenyellow honeydew hotpink
    indianred indigo ivory khaki lavender lavenderblush lawngreen lemonchiffon
    lightblue lightcoral lightcyan lightgoldenrodyellow lightgreen lightgrey
    lightpink lightsalmon lightseagreen lightskyblue lightslategray
    lightsteelblue lightyellow lime limegreen linen magenta maroon
    mediumaquamarine mediumblue mediumorchid mediumpurple mediumseagreen
    mediumslateblue mediumspringgreen mediumturquoise mediumvioletred
    midnightblue mintcream mistyrose moccasin navajowhite navy oldlace olive
    olivedrab orange orangered orchid palegoldenrod palegreen paleturquoise
    palevioletred papayawhip peachpuff peru pink plum powderblue purple red
    rosybrown royalblue saddlebrown salmon sandybrown seagreen seashell sienna
    silver skyblue slateblue slategray snow springgreen steelblue tan teal
    thistle tomato turquoise violet wheat white whitesmoke yellow yellowgreen
    """
)


def is_property(name: str) -> bool:
    """Is ``name`` a known CSS property (``color``, ``margin-top``)?"""
    return name.lower() in CSS_PROPERTIES


def is_builtin(name: str) -> bool:
    """Is ``name`` a CSS keyword value (``auto``, ``inline-block``)?"""
    return name.lower() in CSS_BUILTINS


def is_constant(name: str) -> bool:
    """Is ``name`` a named color (``red``, ``papayawhip``)?"""
    return name.lower() in CSS_CONSTANTS
