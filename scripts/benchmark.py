import argparse
import concurrent.futures
import importlib.util
import os
import sys
import time
import timeit

import psutil

# Force UTF-8 for output
sys.stdout.reconfigure(encoding='utf-8')

# Add parent directory to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from thai_segmenter import NewMMSegmenter, load_dictionary
from thai_segmenter.tokenize import default_dict_path

HAS_PYTHAINLP = importlib.util.find_spec("pythainlp") is not None

TEST_CORPUS = [
    "ฉันไปโรงเรียน",
    "วันนี้อากาศดีมาก",
    "ประเทศไทยมีวัฒนธรรมที่หลากหลายและน่าสนใจ",
    "เขาชอบกินข้าวผัดกับไก่ทอด",
    "มหาวิทยาลัยเทคโนโลยีพระจอมเกล้าธนบุรี",
    "การศึกษาเป็นสิ่งสำคัญสำหรับการพัฒนาประเทศ",
    "ฉันชอบอ่านหนังสือและฟังเพลง",
    "โควิด-19 ส่งผลกระทบต่อเศรษฐกิจโลก",
    "ปัญญาประดิษฐ์กำลังเปลี่ยนแปลงโลก",
    "ผลไม้ไทยมีหลายชนิดเช่นมะม่วงและทุเรียน",
]


def get_memory_mb():
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


def run_concurrently(segment_func, text, iterations, workers):
    start_time = time.time()
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(segment_func, text) for _ in range(iterations)]
        concurrent.futures.wait(futures)
    return time.time() - start_time


def benchmark_suite(dict_path=None, corpus_file=None):
    print(f"Initial Memory: {get_memory_mb():.2f} MB")

    dict_path = dict_path or default_dict_path()
    print(f"Loading dictionary from {dict_path or '<built-in defaults>'}...")
    start_load = time.time()
    mem_before = get_memory_mb()
    dictionary = load_dictionary(dict_path)
    seg = NewMMSegmenter(dictionary)
    print(f"Load Time: {time.time() - start_load:.4f}s ({len(dictionary)} words)")
    print(f"Memory Added: {get_memory_mb() - mem_before:.2f} MB")

    if corpus_file:
        with open(corpus_file, 'r', encoding='utf-8') as f:
            lines = [line.strip() for line in f if line.strip()]
        text = "\n".join(lines[:500])
        print(f"Loaded {len(lines)} lines. Using first 500 non-empty lines.")
    else:
        text = "".join(TEST_CORPUS)

    if HAS_PYTHAINLP:
        from pythainlp import word_tokenize as pythainlp_tokenize
        print("\nLoading PyThaiNLP newmm...")
        mem_before = get_memory_mb()
        pythainlp_tokenize("ทดสอบ", engine="newmm")
        print(f"PyThaiNLP Memory Added: {get_memory_mb() - mem_before:.2f} MB")
    else:
        print("PyThaiNLP not installed. Benchmarking only the local segmenter.")

    print(f"\n--- Text to Segment (Length: {len(text)}) ---")
    print(text[:500] + ("..." if len(text) > 500 else ""))
    print("-" * 60)

    print("\n--- 1. Segmentation Output ---")
    preview = ' | '.join(seg.segment(text))
    print(f"thai_segmenter:\n{preview[:500]}\n")
    if HAS_PYTHAINLP:
        preview = ' | '.join(pythainlp_tokenize(text, engine="newmm"))
        print(f"PyThaiNLP:\n{preview[:500]}\n")

    iterations = 1000
    print(f"--- 2. Sequential Speed ({iterations} iterations) ---")
    start_mem = get_memory_mb()
    t_ours = timeit.timeit(lambda: seg.segment(text), number=iterations)
    print(f"thai_segmenter: {t_ours / iterations * 1000:.3f}ms per call "
          f"(Mem Delta: {get_memory_mb() - start_mem:.2f} MB)")
    if HAS_PYTHAINLP:
        start_mem = get_memory_mb()
        t_ref = timeit.timeit(lambda: pythainlp_tokenize(text, engine="newmm"),
                              number=iterations)
        print(f"PyThaiNLP:      {t_ref / iterations * 1000:.3f}ms per call "
              f"(Mem Delta: {get_memory_mb() - start_mem:.2f} MB)")
        print(f"Speedup: {t_ref / t_ours:.2f}x")

    workers = 10
    calls = 5000
    print(f"\n--- 3. Concurrent Speed ({workers} workers, {calls} total calls) ---")
    start_mem = get_memory_mb()
    elapsed = run_concurrently(seg.segment, text, calls, workers)
    print(f"thai_segmenter: {calls / elapsed:.2f} calls/sec "
          f"(Mem Delta during run: {get_memory_mb() - start_mem:.2f} MB)")

    dictionary.free()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Benchmark the Thai segmenter")
    parser.add_argument("--dict", dest="dict_path", help="Word list, one word per line")
    parser.add_argument("--source", "-s", help="Optional corpus file to benchmark against")
    args = parser.parse_args()

    benchmark_suite(dict_path=args.dict_path, corpus_file=args.source)
