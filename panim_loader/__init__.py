"""
A loader for Properties Animation (.panim) files: per-object, per-property float animations exported from Blender
alongside a glTF scene, sampled once per frame at a fixed frame rate.

    anims = panim_loader.from_file("single_anim.panim")
    value = anims.get_animation_value_at_time(anims.animations[0], 10.0)
"""
from .Core.Errors import DecodeError, TruncatedInputError, InvalidUtf8Error, InvalidFrameRangeError, PanimFileError
from .Core.FileFormats.Panim.PanimInterface import PropertiesAnimation, Animation, AnimationValueType
from .Core.FileFormats.Panim.PanimInterface import decode, from_file
from .Core.FileFormats.Panim.PanimInterface import value_at_exact_frame, value_at_frame, value_at_time
