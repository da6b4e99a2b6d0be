from __future__ import annotations

from .codegen import CodeGenerator

# print: writes the unsigned integer in rdi as decimal plus a newline.
_PRINT = (
    "print:",
    "\tmov r9, -3689348814741910323",
    "\tsub rsp, 40",
    "\tmov BYTE [rsp+31], 10",
    "\tlea rcx, [rsp+30]",
    ".L2:",
    "\tmov rax, rdi",
    "\tlea r8, [rsp+32]",
    "\tmul r9",
    "\tmov rax, rdi",
    "\tsub r8, rcx",
    "\tshr rdx, 3",
    "\tlea rsi, [rdx+rdx*4]",
    "\tadd rsi, rsi",
    "\tsub rax, rsi",
    "\tadd eax, 48",
    "\tmov BYTE [rcx], al",
    "\tmov rax, rdi",
    "\tmov rdi, rdx",
    "\tmov rdx, rcx",
    "\tsub rcx, 1",
    "\tcmp rax, 9",
    "\tja .L2",
    "\tlea rax, [rsp+32]",
    "\tmov edi, 1",
    "\tsub rdx, rax",
    "\txor eax, eax",
    "\tlea rsi, [rsp+32+rdx]",
    "\tmov rdx, r8",
    "\tmov rax, 1",
    "\tsyscall",
    "\tadd rsp, 40",
    "\tret",
    "",
)

# puts: writes r8 bytes starting at r9.
_PUTS = (
    "puts:",
    "\tmov rax, 1",
    "\tmov rdi, 1",
    "\tmov rsi, r9",
    "\tmov rdx, r8",
    "\tsyscall",
    "\tret",
    "",
)


class X86_64Generator(CodeGenerator):
    """NASM output for 64-bit Linux, talking to the kernel through raw syscalls."""

    target = "x86_64"
    builtins = frozenset({"print", "puts"})

    def generate_header(self) -> None:
        self.writeln("BITS 64")
        self.writeln("section .text")
        self.writeln()

    def generate_prelude(self) -> None:
        for line in _PRINT + _PUTS:
            self.writeln(line)

    def generate_entry_point(self) -> None:
        self.writeln("global _start")
        self.writeln("_start:")
        self.writeln("\tcall func_main")
        self.writeln("\tmov rax, 60")
        self.writeln("\tmov rdi, 0")
        self.writeln("\tsyscall")
        self.writeln()

    def generate_data_section(self) -> None:
        self.writeln("section .data")
        for idx, raw in enumerate(self.strings):
            self.writeln(f"\tstr_{idx}: db `{raw}`")

    def emit_function_label(self, name: str) -> None:
        self.writeln(f"func_{name}:")

    def emit_return(self) -> None:
        self.writeln("\tret")
        self.writeln()

    def emit_string_literal(self, index: int, length: int) -> None:
        self.writeln(f"\tmov rax, {length}")
        self.writeln("\tpush rax")
        self.writeln(f"\tmov rax, str_{index}")
        self.writeln("\tpush rax")

    def emit_builtin_call(self, name: str) -> None:
        if name == "print":
            self.writeln("\tpop rdi")
        else:
            # Pointer was pushed last.
            self.writeln("\tpop r9")
            self.writeln("\tpop r8")
        self.writeln(f"\tcall {name}")
