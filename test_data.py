from __future__ import annotations

import dataclasses
import unittest

from nafcodec.data import Flag, Flags, FormatVersion, Header, MaskUnit, Record, SequenceType, Size


class FlagsTests(unittest.TestCase):
    def test_new_flags_are_empty(self):
        flags = Flags()
        self.assertEqual(flags.as_byte(), 0)
        for flag in Flag.values():
            self.assertFalse(flags.test(flag))

    def test_set_and_unset(self):
        flags = Flags()
        flags.set(Flag.SEQUENCE)
        flags.set(Flag.QUALITY)
        self.assertFalse(flags.test(Flag.MASK))
        self.assertTrue(flags.test(Flag.SEQUENCE))
        self.assertTrue(flags.test(Flag.QUALITY))
        flags.unset(Flag.SEQUENCE)
        self.assertFalse(flags.test(Flag.SEQUENCE))
        self.assertTrue(flags.test(Flag.QUALITY))
        # unsetting twice is harmless
        flags.unset(Flag.SEQUENCE)
        self.assertEqual(flags.as_byte(), 0x01)

    def test_flag_union(self):
        flags = Flag.ID | Flag.COMMENT
        self.assertIsInstance(flags, Flags)
        for flag in Flag.values():
            self.assertEqual(flags.test(flag), flag in (Flag.ID, Flag.COMMENT))
        self.assertEqual(list(flags), [Flag.COMMENT, Flag.ID])

    def test_union_is_associative_and_commutative(self):
        a = (Flag.ID | Flag.MASK) | Flag.TITLE
        b = Flag.ID | (Flag.MASK | Flag.TITLE)
        c = Flag.TITLE | Flags(Flag.MASK) | Flag.ID
        self.assertEqual(a, b)
        self.assertEqual(a, c)
        self.assertEqual(a.as_byte(), 0x20 | 0x04 | 0x40)

    def test_or_assign_mutates(self):
        flags = Flags()
        alias = flags
        flags |= Flag.LENGTH
        self.assertIs(flags, alias)
        self.assertIn(Flag.LENGTH, alias)
        union = flags | Flag.MASK
        self.assertIsNot(union, flags)
        self.assertNotIn(Flag.MASK, flags)

    def test_each_flag_is_a_single_bit(self):
        bits = [flag.as_byte() for flag in Flag.values()]
        self.assertEqual(sorted(bits), [1 << i for i in range(8)])

    def test_flag_with_plain_int_stays_int(self):
        self.assertEqual(Flag.ID | 0x10, 0x30)
        self.assertEqual(0x10 | Flag.ID, 0x30)
        self.assertNotIsInstance(Flag.ID | 0x10, Flags)
        self.assertNotIsInstance(0x10 | Flag.ID, Flags)

    def test_from_byte_rejects_out_of_range(self):
        self.assertEqual(len(Flags.from_byte(0xFF)), 8)
        with self.assertRaises(ValueError):
            Flags(0x100)


class HeaderTests(unittest.TestCase):
    def test_defaults(self):
        header = Header()
        self.assertEqual(header.format_version, FormatVersion.V1)
        self.assertEqual(header.sequence_type, SequenceType.DNA)
        self.assertEqual(header.flags, Flags())
        self.assertEqual(header.name_separator, " ")
        self.assertEqual(header.line_length, 60)
        self.assertEqual(header.number_of_sequences, 0)
        self.assertEqual(FormatVersion.default(), FormatVersion.V1)

    def test_read_only(self):
        header = Header(flags=Flag.SEQUENCE)
        with self.assertRaises(AttributeError):
            header.line_length = 80
        flags = header.flags
        flags.set(Flag.QUALITY)
        self.assertFalse(header.flags.test(Flag.QUALITY))

    def test_validation(self):
        with self.assertRaises(ValueError):
            Header(name_separator="||")
        with self.assertRaises(ValueError):
            Header(line_length=-1)
        with self.assertRaises(ValueError):
            Header(number_of_sequences=-3)
        with self.assertRaises(ValueError):
            Header(format_version=3)

    def test_equality(self):
        a = Header(FormatVersion.V2, SequenceType.PROTEIN, Flag.ID | Flag.SEQUENCE, "|", 80, 12)
        b = Header(2, 2, 0x22, "|", 80, 12)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, Header())

    def test_sequence_type_is_nucleotide(self):
        self.assertTrue(SequenceType.DNA.is_nucleotide())
        self.assertTrue(SequenceType.RNA.is_nucleotide())
        self.assertFalse(SequenceType.PROTEIN.is_nucleotide())
        self.assertFalse(SequenceType.TEXT.is_nucleotide())


class RecordTests(unittest.TestCase):
    def test_empty_record(self):
        record = Record()
        self.assertIsNone(record.id)
        self.assertIsNone(record.sequence)

    def test_consistent_lengths(self):
        record = Record(id="r1", comment="test", sequence=b"ACGT", quality="IIII", length=4)
        self.assertEqual(record.length, 4)

    def test_fields_cannot_drift_after_construction(self):
        record = Record(sequence=b"ACGT", quality="IIII", length=4)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            record.quality = "II"
        self.assertEqual(len(record.quality), len(record.sequence))
        with self.assertRaises(ValueError):
            dataclasses.replace(record, quality="II")
        shorter = dataclasses.replace(record, sequence=b"AC", quality="II", length=2)
        self.assertEqual(shorter.length, 2)

    def test_quality_must_match_sequence(self):
        with self.assertRaises(ValueError):
            Record(sequence=b"ACGT", quality="III")
        with self.assertRaises(ValueError):
            Record(sequence=b"ACGT", length=5)
        with self.assertRaises(ValueError):
            Record(quality="II", length=3)


class MaskUnitTests(unittest.TestCase):
    def test_runs(self):
        self.assertEqual(MaskUnit.masked_run(10), MaskUnit(10, True))
        self.assertFalse(MaskUnit.unmasked_run(3).masked)

    def test_zero_length_rejected(self):
        with self.assertRaises(ValueError):
            MaskUnit.masked_run(0)
        with self.assertRaises(ValueError):
            MaskUnit(-1, False)


class SizeTests(unittest.TestCase):
    def test_compressed_display(self):
        self.assertEqual(str(Size("seq", 1000, 250)), "seq: 250 / 1000 (25.000%)")

    def test_uncompressed_display(self):
        size = Size("seq", 1000)
        self.assertEqual(size.compressed, 1000)
        self.assertEqual(str(size), "seq: 1000")

    def test_rounding(self):
        self.assertEqual(str(Size("id", 3, 1)), "id: 1 / 3 (33.333%)")

    def test_empty_original(self):
        self.assertEqual(str(Size("mask", 0, 4)), "mask: 4 / 0 (inf%)")


if __name__ == "__main__":
    unittest.main()
