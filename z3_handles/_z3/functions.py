"""
C prototypes for the Z3 entry points used by z3_handles.

Every native function the runtime calls is declared here so that ctypes
converts arguments and results correctly. Reference:
https://z3prover.github.io/api/html/group__capi.html
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple
from ctypes import (
    POINTER,
    c_bool,
    c_char_p,
    c_double,
    c_int,
    c_uint,
    c_void_p,
)

from .types import (
    Z3_config,
    Z3_context,
    Z3_symbol,
    Z3_ast,
    Z3_sort,
    Z3_func_decl,
    Z3_app,
    Z3_ast_vector,
    Z3_goal,
    Z3_tactic,
    Z3_apply_result,
    Z3_fixedpoint,
    Z3_params,
    Z3_stats,
)

# Arrays of opaque pointers (Z3_ast const[], Z3_sort const[], Z3_app const[])
Z3_ptr_array = POINTER(c_void_p)

Prototype = Tuple[Any, List[Any]]

PROTOTYPES: Dict[str, Prototype] = {
    # Configuration and context lifecycle
    "Z3_get_version": (None, [POINTER(c_uint)] * 4),
    "Z3_mk_config": (Z3_config, []),
    "Z3_del_config": (None, [Z3_config]),
    "Z3_set_param_value": (None, [Z3_config, c_char_p, c_char_p]),
    "Z3_mk_context_rc": (Z3_context, [Z3_config]),
    "Z3_del_context": (None, [Z3_context]),
    # Error reporting
    "Z3_set_error_handler": (None, [Z3_context, c_void_p]),
    "Z3_get_error_code": (c_int, [Z3_context]),
    "Z3_get_error_msg": (c_char_p, [Z3_context, c_int]),
    # Reference counting
    "Z3_inc_ref": (None, [Z3_context, Z3_ast]),
    "Z3_dec_ref": (None, [Z3_context, Z3_ast]),
    "Z3_ast_vector_inc_ref": (None, [Z3_context, Z3_ast_vector]),
    "Z3_ast_vector_dec_ref": (None, [Z3_context, Z3_ast_vector]),
    "Z3_goal_inc_ref": (None, [Z3_context, Z3_goal]),
    "Z3_goal_dec_ref": (None, [Z3_context, Z3_goal]),
    "Z3_tactic_inc_ref": (None, [Z3_context, Z3_tactic]),
    "Z3_tactic_dec_ref": (None, [Z3_context, Z3_tactic]),
    "Z3_apply_result_inc_ref": (None, [Z3_context, Z3_apply_result]),
    "Z3_apply_result_dec_ref": (None, [Z3_context, Z3_apply_result]),
    "Z3_fixedpoint_inc_ref": (None, [Z3_context, Z3_fixedpoint]),
    "Z3_fixedpoint_dec_ref": (None, [Z3_context, Z3_fixedpoint]),
    "Z3_params_inc_ref": (None, [Z3_context, Z3_params]),
    "Z3_params_dec_ref": (None, [Z3_context, Z3_params]),
    "Z3_stats_inc_ref": (None, [Z3_context, Z3_stats]),
    "Z3_stats_dec_ref": (None, [Z3_context, Z3_stats]),
    # Symbols and sorts
    "Z3_mk_string_symbol": (Z3_symbol, [Z3_context, c_char_p]),
    "Z3_get_symbol_string": (c_char_p, [Z3_context, Z3_symbol]),
    "Z3_mk_bool_sort": (Z3_sort, [Z3_context]),
    "Z3_mk_int_sort": (Z3_sort, [Z3_context]),
    "Z3_mk_real_sort": (Z3_sort, [Z3_context]),
    "Z3_mk_bv_sort": (Z3_sort, [Z3_context, c_uint]),
    "Z3_get_sort": (Z3_sort, [Z3_context, Z3_ast]),
    "Z3_get_sort_kind": (c_int, [Z3_context, Z3_sort]),
    "Z3_get_sort_name": (Z3_symbol, [Z3_context, Z3_sort]),
    # Declarations and applications
    "Z3_mk_func_decl": (
        Z3_func_decl,
        [Z3_context, Z3_symbol, c_uint, Z3_ptr_array, Z3_sort],
    ),
    "Z3_mk_app": (Z3_ast, [Z3_context, Z3_func_decl, c_uint, Z3_ptr_array]),
    "Z3_get_decl_name": (Z3_symbol, [Z3_context, Z3_func_decl]),
    "Z3_mk_const": (Z3_ast, [Z3_context, Z3_symbol, Z3_sort]),
    # Constants and numerals
    "Z3_mk_true": (Z3_ast, [Z3_context]),
    "Z3_mk_false": (Z3_ast, [Z3_context]),
    "Z3_mk_numeral": (Z3_ast, [Z3_context, c_char_p, Z3_sort]),
    # Arithmetic and propositional connectives
    "Z3_mk_add": (Z3_ast, [Z3_context, c_uint, Z3_ptr_array]),
    "Z3_mk_sub": (Z3_ast, [Z3_context, c_uint, Z3_ptr_array]),
    "Z3_mk_mul": (Z3_ast, [Z3_context, c_uint, Z3_ptr_array]),
    "Z3_mk_div": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_power": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_unary_minus": (Z3_ast, [Z3_context, Z3_ast]),
    "Z3_mk_eq": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_lt": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_le": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_gt": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_ge": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_not": (Z3_ast, [Z3_context, Z3_ast]),
    "Z3_mk_and": (Z3_ast, [Z3_context, c_uint, Z3_ptr_array]),
    "Z3_mk_or": (Z3_ast, [Z3_context, c_uint, Z3_ptr_array]),
    "Z3_mk_implies": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    # Quantifiers
    "Z3_mk_exists_const": (
        Z3_ast,
        [Z3_context, c_uint, c_uint, Z3_ptr_array, c_uint, Z3_ptr_array, Z3_ast],
    ),
    "Z3_mk_forall_const": (
        Z3_ast,
        [Z3_context, c_uint, c_uint, Z3_ptr_array, c_uint, Z3_ptr_array, Z3_ast],
    ),
    # Inspection
    "Z3_simplify": (Z3_ast, [Z3_context, Z3_ast]),
    "Z3_get_ast_kind": (c_int, [Z3_context, Z3_ast]),
    "Z3_is_app": (c_bool, [Z3_context, Z3_ast]),
    "Z3_to_app": (Z3_app, [Z3_context, Z3_ast]),
    "Z3_get_app_num_args": (c_uint, [Z3_context, Z3_app]),
    "Z3_is_eq_ast": (c_bool, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_get_ast_hash": (c_uint, [Z3_context, Z3_ast]),
    "Z3_get_ast_id": (c_uint, [Z3_context, Z3_ast]),
    "Z3_ast_to_string": (c_char_p, [Z3_context, Z3_ast]),
    "Z3_is_numeral_ast": (c_bool, [Z3_context, Z3_ast]),
    "Z3_get_numeral_string": (c_char_p, [Z3_context, Z3_ast]),
    "Z3_get_numeral_decimal_string": (c_char_p, [Z3_context, Z3_ast, c_uint]),
    "Z3_get_bool_value": (c_int, [Z3_context, Z3_ast]),
    "Z3_translate": (Z3_ast, [Z3_context, Z3_ast, Z3_context]),
    # AST vectors
    "Z3_mk_ast_vector": (Z3_ast_vector, [Z3_context]),
    "Z3_ast_vector_size": (c_uint, [Z3_context, Z3_ast_vector]),
    "Z3_ast_vector_get": (Z3_ast, [Z3_context, Z3_ast_vector, c_uint]),
    "Z3_ast_vector_set": (None, [Z3_context, Z3_ast_vector, c_uint, Z3_ast]),
    "Z3_ast_vector_resize": (None, [Z3_context, Z3_ast_vector, c_uint]),
    "Z3_ast_vector_push": (None, [Z3_context, Z3_ast_vector, Z3_ast]),
    "Z3_ast_vector_translate": (Z3_ast_vector, [Z3_context, Z3_ast_vector, Z3_context]),
    "Z3_ast_vector_to_string": (c_char_p, [Z3_context, Z3_ast_vector]),
    # Algebraic numbers
    "Z3_algebraic_is_value": (c_bool, [Z3_context, Z3_ast]),
    "Z3_algebraic_is_pos": (c_bool, [Z3_context, Z3_ast]),
    "Z3_algebraic_is_neg": (c_bool, [Z3_context, Z3_ast]),
    "Z3_algebraic_is_zero": (c_bool, [Z3_context, Z3_ast]),
    "Z3_algebraic_sign": (c_int, [Z3_context, Z3_ast]),
    "Z3_algebraic_add": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_algebraic_sub": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_algebraic_mul": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_algebraic_div": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_algebraic_root": (Z3_ast, [Z3_context, Z3_ast, c_uint]),
    "Z3_algebraic_power": (Z3_ast, [Z3_context, Z3_ast, c_uint]),
    "Z3_algebraic_lt": (c_bool, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_algebraic_gt": (c_bool, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_algebraic_le": (c_bool, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_algebraic_ge": (c_bool, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_algebraic_eq": (c_bool, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_algebraic_neq": (c_bool, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_algebraic_get_poly": (Z3_ast_vector, [Z3_context, Z3_ast]),
    "Z3_algebraic_get_i": (c_uint, [Z3_context, Z3_ast]),
    # Polynomials
    "Z3_polynomial_subresultants": (
        Z3_ast_vector,
        [Z3_context, Z3_ast, Z3_ast, Z3_ast],
    ),
    # Floating point
    "Z3_mk_fpa_rne": (Z3_ast, [Z3_context]),
    "Z3_mk_fpa_rna": (Z3_ast, [Z3_context]),
    "Z3_mk_fpa_rtp": (Z3_ast, [Z3_context]),
    "Z3_mk_fpa_rtn": (Z3_ast, [Z3_context]),
    "Z3_mk_fpa_rtz": (Z3_ast, [Z3_context]),
    "Z3_mk_fpa_sort": (Z3_sort, [Z3_context, c_uint, c_uint]),
    "Z3_fpa_get_ebits": (c_uint, [Z3_context, Z3_sort]),
    "Z3_fpa_get_sbits": (c_uint, [Z3_context, Z3_sort]),
    "Z3_mk_fpa_nan": (Z3_ast, [Z3_context, Z3_sort]),
    "Z3_mk_fpa_inf": (Z3_ast, [Z3_context, Z3_sort, c_bool]),
    "Z3_mk_fpa_zero": (Z3_ast, [Z3_context, Z3_sort, c_bool]),
    "Z3_mk_fpa_numeral_double": (Z3_ast, [Z3_context, c_double, Z3_sort]),
    "Z3_mk_fpa_abs": (Z3_ast, [Z3_context, Z3_ast]),
    "Z3_mk_fpa_neg": (Z3_ast, [Z3_context, Z3_ast]),
    "Z3_mk_fpa_add": (Z3_ast, [Z3_context, Z3_ast, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_sub": (Z3_ast, [Z3_context, Z3_ast, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_mul": (Z3_ast, [Z3_context, Z3_ast, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_div": (Z3_ast, [Z3_context, Z3_ast, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_fma": (Z3_ast, [Z3_context, Z3_ast, Z3_ast, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_sqrt": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_rem": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_round_to_integral": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_min": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_max": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_leq": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_lt": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_geq": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_gt": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_eq": (Z3_ast, [Z3_context, Z3_ast, Z3_ast]),
    "Z3_mk_fpa_is_normal": (Z3_ast, [Z3_context, Z3_ast]),
    "Z3_mk_fpa_is_subnormal": (Z3_ast, [Z3_context, Z3_ast]),
    "Z3_mk_fpa_is_zero": (Z3_ast, [Z3_context, Z3_ast]),
    "Z3_mk_fpa_is_infinite": (Z3_ast, [Z3_context, Z3_ast]),
    "Z3_mk_fpa_is_nan": (Z3_ast, [Z3_context, Z3_ast]),
    "Z3_mk_fpa_is_negative": (Z3_ast, [Z3_context, Z3_ast]),
    "Z3_mk_fpa_is_positive": (Z3_ast, [Z3_context, Z3_ast]),
    "Z3_mk_fpa_to_fp_float": (Z3_ast, [Z3_context, Z3_ast, Z3_ast, Z3_sort]),
    "Z3_mk_fpa_to_fp_real": (Z3_ast, [Z3_context, Z3_ast, Z3_ast, Z3_sort]),
    "Z3_mk_fpa_to_real": (Z3_ast, [Z3_context, Z3_ast]),
    # Quantifier elimination
    "Z3_qe_lite": (Z3_ast, [Z3_context, Z3_ast_vector, Z3_ast]),
    "Z3_mk_goal": (Z3_goal, [Z3_context, c_bool, c_bool, c_bool]),
    "Z3_goal_assert": (None, [Z3_context, Z3_goal, Z3_ast]),
    "Z3_goal_size": (c_uint, [Z3_context, Z3_goal]),
    "Z3_goal_formula": (Z3_ast, [Z3_context, Z3_goal, c_uint]),
    "Z3_mk_tactic": (Z3_tactic, [Z3_context, c_char_p]),
    "Z3_tactic_apply": (Z3_apply_result, [Z3_context, Z3_tactic, Z3_goal]),
    "Z3_apply_result_get_num_subgoals": (c_uint, [Z3_context, Z3_apply_result]),
    "Z3_apply_result_get_subgoal": (Z3_goal, [Z3_context, Z3_apply_result, c_uint]),
    # Fixedpoint
    "Z3_mk_fixedpoint": (Z3_fixedpoint, [Z3_context]),
    "Z3_fixedpoint_register_relation": (None, [Z3_context, Z3_fixedpoint, Z3_func_decl]),
    "Z3_fixedpoint_add_rule": (None, [Z3_context, Z3_fixedpoint, Z3_ast, Z3_symbol]),
    "Z3_fixedpoint_update_rule": (None, [Z3_context, Z3_fixedpoint, Z3_ast, Z3_symbol]),
    "Z3_fixedpoint_assert": (None, [Z3_context, Z3_fixedpoint, Z3_ast]),
    "Z3_fixedpoint_query": (c_int, [Z3_context, Z3_fixedpoint, Z3_ast]),
    "Z3_fixedpoint_query_relations": (
        c_int,
        [Z3_context, Z3_fixedpoint, c_uint, Z3_ptr_array],
    ),
    "Z3_fixedpoint_get_answer": (Z3_ast, [Z3_context, Z3_fixedpoint]),
    "Z3_fixedpoint_get_reason_unknown": (c_char_p, [Z3_context, Z3_fixedpoint]),
    "Z3_fixedpoint_get_num_levels": (c_uint, [Z3_context, Z3_fixedpoint, Z3_func_decl]),
    "Z3_fixedpoint_get_cover_delta": (
        Z3_ast,
        [Z3_context, Z3_fixedpoint, c_int, Z3_func_decl],
    ),
    "Z3_fixedpoint_add_cover": (
        None,
        [Z3_context, Z3_fixedpoint, c_int, Z3_func_decl, Z3_ast],
    ),
    "Z3_fixedpoint_get_rules": (Z3_ast_vector, [Z3_context, Z3_fixedpoint]),
    "Z3_fixedpoint_get_assertions": (Z3_ast_vector, [Z3_context, Z3_fixedpoint]),
    "Z3_fixedpoint_from_string": (Z3_ast_vector, [Z3_context, Z3_fixedpoint, c_char_p]),
    "Z3_fixedpoint_to_string": (
        c_char_p,
        [Z3_context, Z3_fixedpoint, c_uint, Z3_ptr_array],
    ),
    "Z3_fixedpoint_get_help": (c_char_p, [Z3_context, Z3_fixedpoint]),
    "Z3_fixedpoint_add_fact": (
        None,
        [Z3_context, Z3_fixedpoint, Z3_func_decl, c_uint, POINTER(c_uint)],
    ),
    "Z3_fixedpoint_from_file": (Z3_ast_vector, [Z3_context, Z3_fixedpoint, c_char_p]),
    "Z3_fixedpoint_get_statistics": (Z3_stats, [Z3_context, Z3_fixedpoint]),
    "Z3_fixedpoint_set_params": (None, [Z3_context, Z3_fixedpoint, Z3_params]),
    # Parameter sets
    "Z3_mk_params": (Z3_params, [Z3_context]),
    "Z3_params_set_bool": (None, [Z3_context, Z3_params, Z3_symbol, c_bool]),
    "Z3_params_set_uint": (None, [Z3_context, Z3_params, Z3_symbol, c_uint]),
    "Z3_params_set_double": (None, [Z3_context, Z3_params, Z3_symbol, c_double]),
    "Z3_params_set_symbol": (None, [Z3_context, Z3_params, Z3_symbol, Z3_symbol]),
    "Z3_params_to_string": (c_char_p, [Z3_context, Z3_params]),
    # Statistics
    "Z3_stats_to_string": (c_char_p, [Z3_context, Z3_stats]),
    "Z3_stats_size": (c_uint, [Z3_context, Z3_stats]),
    "Z3_stats_get_key": (c_char_p, [Z3_context, Z3_stats, c_uint]),
    "Z3_stats_is_uint": (c_bool, [Z3_context, Z3_stats, c_uint]),
    "Z3_stats_get_uint_value": (c_uint, [Z3_context, Z3_stats, c_uint]),
    "Z3_stats_get_double_value": (c_double, [Z3_context, Z3_stats, c_uint]),
}


def bind_prototypes(lib: Any) -> List[str]:
    """
    Declare argtypes/restype for every known entry point on a loaded library.

    Returns the names the library does not export (older native builds).
    """
    missing = []
    for name, (restype, argtypes) in PROTOTYPES.items():
        try:
            fn = getattr(lib, name)
        except AttributeError:
            missing.append(name)
            continue
        fn.restype = restype
        fn.argtypes = argtypes
    return missing


def c_array(pointers: Sequence[int]) -> Optional[Any]:
    """Build a C array of opaque pointers, or NULL for an empty sequence."""
    if not pointers:
        return None
    return (c_void_p * len(pointers))(*pointers)


def decode(value: Optional[bytes]) -> str:
    """Decode a Z3_string result."""
    if value is None:
        return ""
    return value.decode("utf-8", errors="replace")
