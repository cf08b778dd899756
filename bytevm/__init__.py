# bytevm: a small stack-based bytecode virtual machine.
#
# Layout:
# - bytevm.types:       runtime values (plain Python float/int/bool plus Nil), numeric profiles, errors
# - bytevm.reader:      the scanner
# - bytevm.compiler:    opcodes, Chunk, disassembler, VM and the placeholder compiler
# - bytevm.interpreter: source -> Chunk -> InterpretResult facade
#
# Numbers use one of two profiles per VM: "double" (IEEE-754) or "byte"
# (unsigned 8-bit with wraparound). See bytevm.types.value.

__version__ = "0.1.0"
